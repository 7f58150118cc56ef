"""
Pydantic schema definitions for API payloads.

Request models accept missing fields so that the services can report
every validation problem in one response; response models mirror the
JSON envelopes the blog frontend reads (``success``, ``data``,
``message``).
"""
