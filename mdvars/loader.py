"""Variables document loading and rendering.

A variables document is YAML with one top-level ``variables`` sequence::

    variables:
      - name: greeting
        value: Hello
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import yaml

from mdvars.exceptions import ValidationError, VariablesParseError, VariablesSerializationError
from mdvars.variables.types import Variable


logger = logging.getLogger(__name__)

VARIABLES_KEY = 'variables'

# Tags whose implicit resolution is kept; everything else stays a string so
# values like ``yes``, ``on``, ``007`` or ``1.10`` keep their spelling.
_KEPT_IMPLICIT_TAGS = {'tag:yaml.org,2002:null', 'tag:yaml.org,2002:merge'}


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that leaves scalars as the text that was written.

    Repeated keys in one mapping are rejected instead of the last one winning.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == 'tag:yaml.org,2002:merge':
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    # Unhashable keys are reported by the base constructor
                    continue
                if duplicate:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        f"found duplicate key {key!r}", key_node.start_mark)
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _construct_as_written(loader: PreservingLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


PreservingLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in _KEPT_IMPLICIT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

# Explicitly tagged scalars (``!!int 0x1F``, ``!!float .inf``) keep their text too
for _tag in ('bool', 'int', 'float', 'timestamp'):
    PreservingLoader.add_constructor(f'tag:yaml.org,2002:{_tag}', _construct_as_written)


class LiteralDumper(yaml.SafeDumper):
    """YAML dumper that writes multi-line strings as literal blocks."""
    pass


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    # NEL is folded when read back from plain, quoted or block scalars; only
    # double quotes escape it
    if '\x85' in data:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='"')
    if '\n' in data:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='|')
    return dumper.represent_scalar('tag:yaml.org,2002:str', data)


LiteralDumper.add_representer(str, _represent_str)


class VariablesLoader:
    """Parses and validates variables documents, and renders them back."""

    def __init__(self):
        """Initialize loader with an empty error list."""
        self.errors: List[ValidationError] = []

    def load(self, path: Path) -> List[Variable]:
        """Read and parse a variables document from disk."""
        try:
            text = Path(path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise VariablesParseError([ValidationError(f"Failed to read variables file: {e}", str(path))])
        return self.parse(text)

    def parse(self, text: str) -> List[Variable]:
        """
        Parse a variables document.

        Args:
            text: YAML text

        Returns:
            Variables in document order

        Raises:
            VariablesParseError: If the text is not valid YAML or not shaped
                like a variables document
        """
        self.errors = []

        try:
            document = yaml.load(text, Loader=PreservingLoader)
        except yaml.YAMLError as e:
            self._add_error(f"Invalid YAML: {e}")
            self._raise_validation_errors()

        # An empty document carries no variables
        if document is None:
            return []

        if not isinstance(document, dict):
            self._add_error(f"Variables document must be a YAML mapping, got {type(document).__name__}")
            self._raise_validation_errors()

        records = document.get(VARIABLES_KEY)
        if records is None:
            return []

        if not isinstance(records, list):
            self._add_error(f"'{VARIABLES_KEY}' must be a list, got {type(records).__name__}",
                            VARIABLES_KEY)
            self._raise_validation_errors()

        variables = []
        for i, record in enumerate(records):
            variable = self._parse_record(record, f"{VARIABLES_KEY}[{i}]")
            if variable is not None:
                variables.append(variable)

        if self.errors:
            self._raise_validation_errors()

        logger.debug(f"Parsed {len(variables)} variable(s)")
        return variables

    def _parse_record(self, record: Any, path: str) -> Optional[Variable]:
        """Validate one ``{name, value}`` record."""
        if record is None:
            return Variable(name='', value='')

        if not isinstance(record, dict):
            self._add_error(f"Variable record must be a mapping, got {type(record).__name__}", path)
            return None

        name = self._scalar_to_str(record.get('name'), f"{path}.name")
        value = self._scalar_to_str(record.get('value'), f"{path}.value")
        if name is None or value is None:
            return None

        return Variable(name=name, value=value)

    def _scalar_to_str(self, value: Any, path: str) -> Optional[str]:
        """Convert a YAML scalar to its string form; missing and null become ''."""
        if value is None:
            return ''
        if isinstance(value, str):
            return value
        self._add_error(f"Expected a string, got {type(value).__name__}", path)
        return None

    def dump(self, variables: Mapping[str, str]) -> str:
        """
        Render a name -> value mapping as a variables document.

        Records are sorted by name so repeated exports are stable.

        Raises:
            VariablesSerializationError: If the mapping cannot be represented
        """
        try:
            document: Dict[str, Any] = {
                VARIABLES_KEY: [
                    Variable(name=name, value=variables[name]).to_dict()
                    for name in sorted(variables)
                ]
            }
            return yaml.dump(
                document,
                Dumper=LiteralDumper,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False
            )
        except (yaml.YAMLError, UnicodeError, TypeError) as e:
            raise VariablesSerializationError(str(e)) from e

    def _add_error(self, message: str, path: str = ""):
        """Add validation error."""
        self.errors.append(ValidationError(message, path))

    def _raise_validation_errors(self):
        """Raise exception with validation errors."""
        raise VariablesParseError(self.errors)
