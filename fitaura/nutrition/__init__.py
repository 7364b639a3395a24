# -*- coding: utf-8 -*-
"""Nutrition domain (meal logging, day totals, goals).

Goals can be edited directly or resynced from the nutrition section of a
generated plan.
"""
