"""Helpers shared by CLI commands."""

import logging
from argparse import Namespace
from pathlib import Path
from typing import Dict

from mdvars.exceptions import VariablesParseError, ValidationError
from mdvars.loader import VariablesLoader
from mdvars.service import VariableService


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(args: Namespace) -> None:
    """Set up logging from --log-level, --debug and --quiet."""
    level_name = 'warning' if args.log_level == 'warn' else args.log_level
    log_level = getattr(logging, level_name.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(level=log_level, format=LOG_FORMAT)


def parse_assignments(args: Namespace) -> Dict[str, str]:
    """Parse --set KEY=VALUE pairs."""
    assignments = {}

    if getattr(args, 'set', None):
        for item in args.set:
            if '=' not in item:
                raise ValueError(f"Invalid variable format: {item}. Expected KEY=VALUE")
            key, value = item.split('=', 1)
            assignments[key] = value

    return assignments


def build_service(args: Namespace) -> VariableService:
    """
    Create a service whose globals come from --vars files then --set pairs.

    Raises:
        VariablesParseError: If a variables file is missing or malformed
        ValueError: If a --set pair is malformed
    """
    service = VariableService()

    for vars_file in getattr(args, 'vars', None) or []:
        path = Path(vars_file)
        if not path.exists():
            raise VariablesParseError([ValidationError("Variables file not found", str(path))])

        logger.info(f"Loading variables: {path}")
        variables = VariablesLoader().load(path)
        service.store.update({variable.name: variable.value for variable in variables})

    for name, value in parse_assignments(args).items():
        service.set_global(name, value)

    return service
