from collections import defaultdict


class RequestGenerations:
    """Per-stream request counters used to drop stale responses.

    Every request issued on a stream takes the next generation number. A
    response is only applied while its generation is still the latest one
    issued for that stream.
    """

    def __init__(self) -> None:
        self._latest: dict[str, int] = defaultdict(int)

    def issue(self, stream: str) -> int:
        self._latest[stream] += 1
        return self._latest[stream]

    def invalidate(self, stream: str) -> None:
        """Supersede any in-flight request on the stream without issuing one."""
        self._latest[stream] += 1

    def is_current(self, stream: str, generation: int) -> bool:
        return self._latest[stream] == generation

    def reset(self) -> None:
        self._latest.clear()
