# -*- coding: utf-8 -*-
"""Activity domain (per-day action records, streaks, calendar, badges)."""
