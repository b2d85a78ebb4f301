"""
Outreach text generation: proxy client, deterministic fallbacks, and the
request/fallback protocol shared by the LinkedIn, cold email and HR email features.
"""

from networknote.services.generation.protocol import OutreachGenerator, get_outreach_generator

__all__ = ["OutreachGenerator", "get_outreach_generator"]
