"""
Storage for the state of every simulated body.

A BodyStore keeps the per-body quantities as parallel numpy arrays so the
integrators can work on whole (n_bodies, 3) blocks at once. Bodies are
identified by index; names are optional labels attached by the builders.
"""
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from .config import ConfigurationError


def _as_vectors(values, n_bodies: int, label: str) -> np.ndarray:
    """(n_bodies, 3) float array; a flat array of 3 * n_bodies values is also accepted."""
    array = np.array(values, dtype=float)
    if array.ndim == 1 and array.shape[0] == 3 * n_bodies:
        array = array.reshape(n_bodies, 3)
    if array.shape != (n_bodies, 3):
        raise ConfigurationError(f"expected ({n_bodies}, 3) {label}, got shape {array.shape}")
    return array


@dataclass(frozen=True, eq=False)
class Body:
    """Read-only view of a single body."""
    name: Optional[str]
    mass: float
    position: np.ndarray
    velocity: np.ndarray
    radius: float


class BodyStore:
    """
    Masses, positions, velocities and display radii of all bodies.

    The number of bodies is fixed at construction. Positions and velocities
    are only replaced as a whole through replace_state().
    """

    def __init__(
        self,
        masses: np.ndarray,
        positions: np.ndarray,
        velocities: np.ndarray,
        radii: np.ndarray,
        names: Optional[Sequence[str]] = None
    ):
        self.masses = masses
        self.positions = positions
        self.velocities = velocities
        self.radii = radii
        self.names = tuple(names) if names is not None else None

    @classmethod
    def from_arrays(
        cls,
        masses,
        positions,
        velocities,
        radii=None,
        names: Optional[Sequence[str]] = None
    ) -> "BodyStore":
        """
        Build a validated store from array-likes.

        Args:
            masses: (n_bodies,) masses, all strictly positive
            positions: (n_bodies, 3) positions
            velocities: (n_bodies, 3) velocities
            radii: (n_bodies,) display radii, zeros when omitted
            names: Optional labels, one per body
        Returns:
            A new BodyStore owning copies of the data
        """
        masses = np.array(masses, dtype=float).reshape(-1)
        n_bodies = masses.shape[0]
        positions = _as_vectors(positions, n_bodies, "positions")
        velocities = _as_vectors(velocities, n_bodies, "velocities")
        if radii is None:
            radii = np.zeros(n_bodies)
        radii = np.array(radii, dtype=float).reshape(-1)
        if radii.shape != masses.shape:
            raise ConfigurationError(f"expected {n_bodies} radii, got {radii.shape[0]}")
        if names is not None and len(names) != n_bodies:
            raise ConfigurationError(f"expected {n_bodies} names, got {len(names)}")

        if np.any(~np.isfinite(masses)) or np.any(masses <= 0.0):
            raise ConfigurationError("all body masses must be positive and finite")
        if not (np.all(np.isfinite(positions)) and np.all(np.isfinite(velocities))):
            raise ConfigurationError("positions and velocities must be finite")
        if np.any(~np.isfinite(radii)) or np.any(radii < 0.0):
            raise ConfigurationError("display radii must be non-negative and finite")

        return cls(masses, positions, velocities, radii, names)

    def __len__(self) -> int:
        return self.masses.shape[0]

    def __iter__(self) -> Iterator[Body]:
        for i in range(len(self)):
            yield self.body(i)

    def body(self, index: int) -> Body:
        name = self.names[index] if self.names is not None else None
        return Body(
            name=name,
            mass=float(self.masses[index]),
            position=self.positions[index].copy(),
            velocity=self.velocities[index].copy(),
            radius=float(self.radii[index]),
        )

    def index_of(self, name: str) -> int:
        """Index of the body labelled `name` (builder metadata only)."""
        if self.names is None or name not in self.names:
            raise KeyError(name)
        return self.names.index(name)

    def replace_state(self, positions: np.ndarray, velocities: np.ndarray) -> None:
        """
        Publish a complete new set of positions and velocities.

        Both arrays must cover every body; masses are left untouched.
        """
        if positions.shape != self.positions.shape or velocities.shape != self.velocities.shape:
            raise ValueError(
                f"state shape mismatch: expected {self.positions.shape}, "
                f"got {positions.shape} and {velocities.shape}"
            )
        self.positions = positions
        self.velocities = velocities

    def copy(self) -> "BodyStore":
        return BodyStore(
            self.masses.copy(),
            self.positions.copy(),
            self.velocities.copy(),
            self.radii.copy(),
            self.names,
        )

    def snapshot(self) -> "BodyStore":
        """Copy whose arrays are marked read-only."""
        snap = self.copy()
        for array in (snap.masses, snap.positions, snap.velocities, snap.radii):
            array.flags.writeable = False
        return snap

    def total_mass(self) -> float:
        return float(np.sum(self.masses))

    def center_of_mass(self) -> np.ndarray:
        if len(self) == 0:
            return np.zeros(3)
        return np.sum(self.positions * self.masses[:, np.newaxis], axis=0) / self.total_mass()

    def momentum(self) -> np.ndarray:
        return np.sum(self.velocities * self.masses[:, np.newaxis], axis=0)

    def state(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(positions, velocities, masses), the triple the integrators take."""
        return self.positions, self.velocities, self.masses
