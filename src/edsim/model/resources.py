"""Fixed-capacity doctor and bed pools."""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from edsim.core.entities import PoolType, SimulationError


@dataclass
class Resource:
    """A single doctor or bed.

    Attributes:
        index: Position within its pool.
        available: Whether the resource can take a patient.
        free_at: Minute the current (or last) treatment ends.
    """
    index: int
    available: bool = True
    free_at: int = 0


class ResourcePool:
    """Fixed set of interchangeable resources released by time.

    Resources are never handed back by a patient; a busy resource
    becomes available again once the clock reaches its free_at time.

    Attributes:
        pool_type: Which pool this is (doctors or beds).
        resources: The resource records, all available at time 0.
    """

    def __init__(self, pool_type: PoolType, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"{pool_type.value} capacity cannot be negative, got {capacity}")
        self.pool_type = pool_type
        self.resources: List[Resource] = [Resource(index=i) for i in range(capacity)]

    @property
    def name(self) -> str:
        return self.pool_type.value

    @property
    def capacity(self) -> int:
        return len(self.resources)

    @property
    def busy_count(self) -> int:
        """Number of resources currently marked busy."""
        return sum(1 for r in self.resources if not r.available)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def reclaim_expired(self, now: int) -> int:
        """Release every busy resource whose treatment has ended.

        Args:
            now: Current simulation minute.

        Returns:
            Number of resources released.
        """
        released = 0
        for resource in self.resources:
            if not resource.available and resource.free_at <= now:
                resource.available = True
                released += 1
        return released

    def find_available(self, at_time: int) -> Optional[Resource]:
        """First resource free at `at_time`, or None."""
        for resource in self.resources:
            if resource.available and resource.free_at <= at_time:
                return resource
        return None

    def assign(self, resource: Resource, at_time: int, duration: int) -> int:
        """Mark a resource busy for `duration` minutes from `at_time`.

        Returns:
            The minute the resource becomes free again.

        Raises:
            SimulationError: If the resource is already busy.
        """
        if not resource.available or resource.free_at > at_time:
            raise SimulationError(
                f"{self.name}[{resource.index}] assigned at {at_time} "
                f"while busy until {resource.free_at}"
            )
        resource.available = False
        resource.free_at = at_time + duration
        return resource.free_at

    def next_release_after(self, now: int) -> Optional[int]:
        """Earliest free_at of a busy resource later than `now`."""
        times = [r.free_at for r in self.resources if not r.available and r.free_at > now]
        return min(times) if times else None
