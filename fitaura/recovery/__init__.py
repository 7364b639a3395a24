# -*- coding: utf-8 -*-
"""Recovery domain (sleep logs, readiness score bands)."""
