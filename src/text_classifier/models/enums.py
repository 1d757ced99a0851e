"""
Enumerations for classifier data models.
"""

from enum import Enum


class PerformanceRating(str, Enum):
    """
    Qualitative rating of end-to-end classification latency.
    
    Ordered from fastest to slowest band.
    """
    
    EXCELLENT = "excellent"
    GOOD = "good"
    SLOW = "slow"
    
    @classmethod
    def from_latency(
        cls,
        total_ms: float,
        excellent_below_ms: float = 50.0,
        good_below_ms: float = 100.0,
    ) -> "PerformanceRating":
        """Pick the band for a total latency in milliseconds."""
        if total_ms < excellent_below_ms:
            return cls.EXCELLENT
        if total_ms < good_below_ms:
            return cls.GOOD
        return cls.SLOW
