"""
Board state representation for beamfield.

The field array holds terrain labels; the entity lists are authoritative for
pawn and target occupancy. Beams are mirrored into the field as well.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .board import (
    ENTITY_TYPES, DEFENDER,
    position_to_xy
)


@dataclass
class Entity:
    """A beam, pawn or target sitting on one cell."""
    position: int
    type: str
    id: int

    def to_dict(self) -> dict:
        return {'position': self.position, 'type': self.type, 'id': self.id}

    @classmethod
    def from_dict(cls, data: dict) -> Entity:
        if data['type'] not in ENTITY_TYPES:
            raise ValueError(f"Unknown entity type: {data['type']}")
        return cls(position=int(data['position']), type=data['type'], id=int(data['id']))


@dataclass
class BoardState:
    """
    Complete state of a beamfield board.

    Attributes:
        width: Number of columns
        height: Number of rows
        turn: 'A' (attacker) or 'D' (defender)
        beams: Beam entities, in board order
        pawns: Pawn entities, in board order
        targets: Target entities, in board order
        field: width*height cell labels ('empty', 'block' or 'beam')
    """
    width: int
    height: int
    turn: str = DEFENDER
    beams: list[Entity] = field(default_factory=list)
    pawns: list[Entity] = field(default_factory=list)
    targets: list[Entity] = field(default_factory=list)
    field: list[str] = field(default_factory=list)

    @property
    def num_cells(self) -> int:
        return self.width * self.height

    def entities(self) -> Iterator[Entity]:
        """Iterate over beams, then pawns, then targets."""
        yield from self.beams
        yield from self.pawns
        yield from self.targets

    def find_entity(self, entity_id: int) -> Optional[Entity]:
        """Return the first entity with the given id, or None."""
        for entity in self.entities():
            if entity.id == entity_id:
                return entity
        return None

    def entity_at(self, position: int) -> Optional[Entity]:
        """Return the entity drawn at a cell: targets win over pawns, pawns over beams."""
        for entities in (self.targets, self.pawns, self.beams):
            for entity in entities:
                if entity.position == position:
                    return entity
        return None

    def xy(self, position: int) -> tuple[int, int]:
        return position_to_xy(position, self.width)

    def copy(self) -> BoardState:
        """Create an independent copy."""
        return BoardState(
            width=self.width,
            height=self.height,
            turn=self.turn,
            beams=[Entity(e.position, e.type, e.id) for e in self.beams],
            pawns=[Entity(e.position, e.type, e.id) for e in self.pawns],
            targets=[Entity(e.position, e.type, e.id) for e in self.targets],
            field=list(self.field),
        )

    def to_dict(self) -> dict:
        """JSON-friendly view."""
        return {
            'width': self.width,
            'height': self.height,
            'turn': self.turn,
            'beams': [e.to_dict() for e in self.beams],
            'pawns': [e.to_dict() for e in self.pawns],
            'targets': [e.to_dict() for e in self.targets],
            'field': list(self.field),
        }

    @classmethod
    def from_dict(cls, data: dict) -> BoardState:
        return cls(
            width=int(data['width']),
            height=int(data['height']),
            turn=data['turn'],
            beams=[Entity.from_dict(e) for e in data.get('beams', [])],
            pawns=[Entity.from_dict(e) for e in data.get('pawns', [])],
            targets=[Entity.from_dict(e) for e in data.get('targets', [])],
            field=list(data['field']),
        )

    def __repr__(self) -> str:
        """Pretty print the board."""
        from .notation import encode
        return encode(self).rstrip('\n')
