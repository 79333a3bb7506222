"""Process command: expand a document."""

import logging
import sys
from argparse import Namespace

from mdvars.documents import read_document, write_document
from mdvars.exceptions import DocumentError, VariablesParseError
from .common import build_service, configure_logging


logger = logging.getLogger(__name__)


def process_document(args: Namespace) -> int:
    """
    Expand a document with its declarations and the given global variables.

    Exit codes: 0 on success, 1 on I/O failure, 2 on invalid input or
    unresolved placeholders with --strict.
    """
    configure_logging(args)

    try:
        service = build_service(args)
        content = read_document(args.document)
        logger.info(f"Processing document: {args.document}")

        expanded = service.process(content)

        if args.out:
            write_document(args.out, expanded)
        else:
            sys.stdout.write(expanded)

        if args.strict:
            unresolved = service.processor.unresolved(content)
            if unresolved:
                logger.error(f"Unresolved placeholders: {', '.join(unresolved)}")
                return 2

        return 0

    except VariablesParseError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.path + ': ' if error.path else ''}{error.message}")
        return e.exit_code
    except DocumentError as e:
        logger.error(str(e))
        return e.exit_code
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2
