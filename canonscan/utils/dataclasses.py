# -*- coding: utf-8 -*-
"""
Core data structures for the canon extraction pipeline

Single source of truth for canon entries, per-scan candidates and the scan
result contract handed to the editor host and continuity tracker. Import from
this module rather than redefining shapes in individual stages.

Examples:
    from canonscan.utils.dataclasses import CanonEntry, ScanResult

    entry = CanonEntry(id="c_001", type="character", name="Marcus Webb")
    result.to_dict()   # camelCase contract: scannedAt, existingMentions, newEntities

"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# ============================================================================
# ENUMS
# ============================================================================

class EntityCategory(Enum):
    """Categories a new entity can be proposed under."""
    CHARACTER = "character"
    LOCATION = "location"
    SYSTEM = "system"
    ARTIFACT = "artifact"


# ============================================================================
# CANON
# ============================================================================

@dataclass(frozen=True)
class CanonEntry:
    """
    Registered story-bible fact, owned by the external canon store.

    The engine only reads `id`, `type` and `name`.
    """
    id: str
    type: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['CanonEntry']:
        """
        Build an entry from a store record.

        Accepts `id` or `canonId`. Returns None when the record has no usable
        name, so callers can skip it.
        """
        if not isinstance(data, dict):
            return None
        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            return None
        entry_id = data.get('id', data.get('canonId', ''))
        return cls(
            id=str(entry_id) if entry_id is not None else '',
            type=str(data.get('type') or ''),
            name=name,
        )


# ============================================================================
# CANDIDATES (per scan, never persisted)
# ============================================================================

@dataclass
class ContextFlags:
    """Contextual cues found around a candidate in the current prose."""
    near_preposition: bool = False
    artifact_context: bool = False
    system_context: bool = False


@dataclass
class Candidate:
    """
    Unregistered capitalized phrase observed during one scan.

    `text` is the normalized display form; `first_seen` is the index of its
    first extraction and drives output ordering.
    """
    text: str
    normalized_key: str
    occurrence_count: int = 1
    first_seen: int = 0
    raw_forms: List[str] = field(default_factory=list)
    context_flags: ContextFlags = field(default_factory=ContextFlags)

    @property
    def is_single_word(self) -> bool:
        return ' ' not in self.text

    @property
    def words(self) -> List[str]:
        return self.text.split(' ')


# ============================================================================
# SCAN RESULT
# ============================================================================

@dataclass
class ExistingMention:
    """Mention count for one registered canon entry."""
    canon_id: str
    name: str
    type: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'canonId': self.canon_id,
            'name': self.name,
            'type': self.type,
            'count': self.count,
        }


@dataclass
class NewEntities:
    """Proposed unregistered entities, one ordered list per category."""
    characters: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)
    systems: List[str] = field(default_factory=list)
    artifacts: List[str] = field(default_factory=list)

    def for_category(self, category: EntityCategory) -> List[str]:
        """Return the bucket list for a category."""
        return {
            EntityCategory.CHARACTER: self.characters,
            EntityCategory.LOCATION: self.locations,
            EntityCategory.SYSTEM: self.systems,
            EntityCategory.ARTIFACT: self.artifacts,
        }[category]

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            'characters': list(self.characters),
            'locations': list(self.locations),
            'systems': list(self.systems),
            'artifacts': list(self.artifacts),
        }


@dataclass
class ScanResult:
    """Complete output of one scan: existing mentions plus proposed entities."""
    scanned_at: str
    existing_mentions: List[ExistingMention] = field(default_factory=list)
    new_entities: NewEntities = field(default_factory=NewEntities)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase contract consumed by the editor host."""
        return {
            'scannedAt': self.scanned_at,
            'existingMentions': [m.to_dict() for m in self.existing_mentions],
            'newEntities': self.new_entities.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanResult':
        """Inverse of to_dict()."""
        entities = data.get('newEntities', {})
        return cls(
            scanned_at=data.get('scannedAt', ''),
            existing_mentions=[
                ExistingMention(
                    canon_id=m.get('canonId', ''),
                    name=m.get('name', ''),
                    type=m.get('type', ''),
                    count=int(m.get('count', 0)),
                )
                for m in data.get('existingMentions', [])
            ],
            new_entities=NewEntities(
                characters=list(entities.get('characters', [])),
                locations=list(entities.get('locations', [])),
                systems=list(entities.get('systems', [])),
                artifacts=list(entities.get('artifacts', [])),
            ),
        )
