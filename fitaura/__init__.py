# -*- coding: utf-8 -*-
"""Fitaura activity & nutrition ledger."""
