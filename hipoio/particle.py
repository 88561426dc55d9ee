"""Reconstructed particle with kinematic helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple


class ThreeVector(NamedTuple):
    x: float
    y: float
    z: float


class FourVector(NamedTuple):
    x: float
    y: float
    z: float
    t: float


@dataclass(frozen=True)
class Particle:
    """A particle with momentum, vertex and identification information."""

    pdg: int
    status: int
    index: int
    charge: int
    mass: float
    px: float
    py: float
    pz: float
    energy: float
    vx: float
    vy: float
    vz: float
    vt: float
    beta: float
    chi2pid: float

    def phi(self) -> float:
        """Azimuthal angle in degrees, 0 when the transverse momentum vanishes."""
        if self.px == 0.0 and self.py == 0.0:
            return 0.0
        return math.degrees(math.atan2(self.py, self.px))

    def theta(self) -> float:
        """Polar angle in degrees."""
        if self.pz == 0:
            return 90.0
        return math.degrees(math.acos(self.pz / self.p()))

    def angle_to(self, other: Particle) -> float:
        """Opening angle to ``other`` in radians."""
        product = self.p() * other.p()
        if product == 0:
            cosine = 1.0
        else:
            dot = self.px * other.px + self.py * other.py + self.pz * other.pz
            cosine = dot / product
        return math.acos(max(min(cosine, 1.0), -1.0))

    def p(self) -> float:
        """Momentum magnitude."""
        return math.sqrt(self.px * self.px + self.py * self.py + self.pz * self.pz)

    def pt(self) -> float:
        """Transverse momentum."""
        return math.sqrt(self.px * self.px + self.py * self.py)

    def r(self) -> float:
        """Transverse distance of the vertex from the beam axis."""
        return math.sqrt(self.vx * self.vx + self.vy * self.vy)

    def rho(self) -> float:
        """Distance of the vertex from the origin."""
        return math.sqrt(self.vx * self.vx + self.vy * self.vy + self.vz * self.vz)

    def four_momentum(self) -> FourVector:
        return FourVector(self.px, self.py, self.pz, self.energy)

    def four_vertex(self) -> FourVector:
        return FourVector(self.vx, self.vy, self.vz, self.vt)

    def momentum(self) -> ThreeVector:
        return ThreeVector(self.px, self.py, self.pz)

    def vertex(self) -> ThreeVector:
        return ThreeVector(self.vx, self.vy, self.vz)