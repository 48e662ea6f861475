"""
Claim Decision Support System

This package helps a claims reviewer decide whether to approve a claim by:
- Retrieving relevant policy, SOP and regulatory excerpts for the case
- Summarizing how similar historical claims were ultimately judged
- Producing a regret-aware risk score with explanatory factors
"""

__version__ = "1.0.0"
