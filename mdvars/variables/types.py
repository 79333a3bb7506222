"""Variable record types."""

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass
class Variable:
    """A single name/value pair, as declared in a document or a variables file."""
    name: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to the ``{name, value}`` record used in variables documents."""
        return asdict(self)
