"""Fraud Transaction Explorer Service.

This service provides APIs for fraud analysts to:
- Browse transactions loaded from a CSV file or URL
- Search, filter by status or fraud flag, sort and paginate them
- See summary stats (total, fraud count, declined count, fraud rate)
- Define, edit, duplicate and delete fraud detection rules
"""

__version__ = "0.1.0"
