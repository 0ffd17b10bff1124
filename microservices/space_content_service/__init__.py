"""
Space Content Service

Read-only aggregation service over the Adobe Target Admin API providing:
- Activity selection by content space name and schedule (live/scheduled/expired)
- Experience, mbox and audience joins into enriched, ordered options
- Offer content resolution for every option
- A single date-ordered view of everything running on a space

Port: 8260
"""

__version__ = "1.0.0"
__service__ = "space_content_service"
