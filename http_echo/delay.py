import asyncio


class ResponseDelay:
    """Fixed artificial latency applied before each echo response."""

    def __init__(self, milliseconds: int = 0):
        if milliseconds < 0:
            raise ValueError("delay must not be negative")
        self.milliseconds = milliseconds

    @property
    def seconds(self) -> float:
        return self.milliseconds / 1000

    async def delay(self) -> None:
        # Only the calling request waits; the event loop keeps serving others.
        if self.milliseconds:
            await asyncio.sleep(self.seconds)
