"""Test configuration."""

import os

os.environ["BUNDLESCOPE_ENVIRONMENT"] = "testing"
# Tests must never launch a real browser.
os.environ["BUNDLESCOPE_OPEN_BROWSER"] = "false"
