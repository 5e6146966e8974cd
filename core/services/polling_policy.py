"""Adaptive polling interval rules for the notification sync engine."""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class PollingPolicy:
    """Floor, ceiling and growth factors for the polling interval.

    Every transition returns a value clamped to ``[floor_ms, ceiling_ms]``.
    """

    floor_ms: int = 5000
    ceiling_ms: int = 30000
    backoff_factor: float = 1.2
    recovery_factor: float = 0.8

    def __post_init__(self):
        if self.floor_ms <= 0 or self.ceiling_ms < self.floor_ms:
            raise ValueError(
                f"Invalid polling bounds: floor={self.floor_ms} "
                f"ceiling={self.ceiling_ms}"
            )
        if self.backoff_factor < 1 or not 0 < self.recovery_factor <= 1:
            raise ValueError(
                f"Invalid polling factors: backoff={self.backoff_factor} "
                f"recovery={self.recovery_factor}"
            )

    @classmethod
    def from_settings(cls) -> "PollingPolicy":
        return cls(
            floor_ms=settings.NOTIFICATION_POLL_FLOOR_MS,
            ceiling_ms=settings.NOTIFICATION_POLL_CEILING_MS,
            backoff_factor=settings.NOTIFICATION_POLL_BACKOFF_FACTOR,
            recovery_factor=settings.NOTIFICATION_POLL_RECOVERY_FACTOR,
        )

    def clamp(self, interval_ms: float) -> int:
        return int(round(min(self.ceiling_ms, max(self.floor_ms, interval_ms))))

    def on_success(self, interval_ms: int) -> int:
        """Quiet poll: back off toward the ceiling."""
        return self.clamp(interval_ms * self.backoff_factor)

    def on_error(self, interval_ms: int) -> int:
        """Failed poll: tighten toward the floor to recover quickly."""
        return self.clamp(interval_ms * self.recovery_factor)

    def on_hidden(self) -> int:
        return self.ceiling_ms

    def on_visible(self) -> int:
        return self.floor_ms
