from __future__ import annotations

APP_ID = "mdcal"
PURPOSE = "Generate markdown calendar tables for a month, a year or a month range"
VERSION = "0.1.1"
CONFIG_ENV = "MDCAL_CONFIG"
