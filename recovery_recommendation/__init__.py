"""Recovery Recommendation - athlete recovery recommendation service

Main features:
- Soreness-based recovery recommendations
- Time-boxed recovery plans built from the exercise catalog
- Movement (posture image) analysis
- Session feedback analysis
- Response cache + local rate limit in front of the LLM, with local fallbacks
"""

__version__ = "1.0.0"
