"""Export and vars commands: show variables as YAML."""

import logging
import sys
from argparse import Namespace
from pathlib import Path

from mdvars.documents import read_document
from mdvars.exceptions import DocumentError, VariablesParseError
from mdvars.loader import VariablesLoader
from mdvars.variables import TemplateProcessor
from .common import build_service, configure_logging


logger = logging.getLogger(__name__)


def export_variables(args: Namespace) -> int:
    """Merge --vars and --set sources and print the resulting variables document."""
    configure_logging(args)

    try:
        service = build_service(args)
    except VariablesParseError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.path + ': ' if error.path else ''}{error.message}")
        return e.exit_code
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2

    result = service.export_globals()
    if not result.success:
        logger.error(result.error)
        return 1

    if args.out:
        out_path = Path(args.out)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(result.yaml_content, encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to write {out_path}: {e}")
            return 1
        logger.info(f"Exported variables to: {out_path}")
    else:
        sys.stdout.write(result.yaml_content)

    return 0


def list_declarations(args: Namespace) -> int:
    """Print the @var declarations of a document as a variables document."""
    configure_logging(args)

    try:
        content = read_document(args.document)
    except DocumentError as e:
        logger.error(str(e))
        return e.exit_code

    declarations, _ = TemplateProcessor().extract_declarations(content)

    # Later declarations win, as they do during processing
    local_vars = {}
    for variable in declarations:
        local_vars[variable.name] = variable.value

    sys.stdout.write(VariablesLoader().dump(local_vars))
    return 0
