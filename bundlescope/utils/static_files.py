"""Static asset serving that always re-reads from disk."""

from starlette.datastructures import Headers
from starlette.staticfiles import StaticFiles


class NoCacheStaticFiles(StaticFiles):
    """StaticFiles variant for live front-end edits.

    Conditional requests never short-circuit to 304 and responses carry
    ``Cache-Control: no-store`` so browsers fetch changed assets on reload.
    """

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = "no-store"
        return response

    def is_not_modified(self, response_headers: Headers, request_headers: Headers) -> bool:
        return False
