# -*- coding: utf-8 -*-
"""Coach (external AI collaborator: plans, food macro estimates, recovery readiness)."""
