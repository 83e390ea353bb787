"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import logging
import sys
import click
from functools import wraps
from typing import Generator
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)

logger = logging.getLogger("gitrs")


def _emit(item):
    if hasattr(item, 'to_dict'):
        item = item.to_dict()
    print(json.dumps(item, ensure_ascii=False), flush=True)


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Clean JSON lines on stdout
    - Diagnostics through the gitrs logger on stderr
    - --verbose/-v switches logging to DEBUG
    - --quiet/-q suppresses data output
    - Consistent error handling with exit codes from exit_codes
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        from .config import configure_logging, load_config

        verbose = kwargs.pop('verbose', False)
        quiet = kwargs.pop('quiet', False)

        try:
            config = load_config()
            configure_logging(config, verbose=verbose)
            kwargs['config'] = config

            result = func(*args, **kwargs)

            if quiet or result is None:
                # Command handles its own output
                pass
            elif isinstance(result, (Generator, list, tuple)):
                for item in result:
                    _emit(item)
            else:
                _emit(result)

            sys.exit(SUCCESS)

        except KeyboardInterrupt:
            logger.error("Interrupted by user")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            logger.error(str(e))
            if not quiet:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": e.exit_code
                }
                path = getattr(e, 'path', None)
                if path is not None:
                    error_obj['path'] = str(path)
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(e.exit_code)
        except Exception as e:
            logger.error(f"Command failed: {e}")
            if not quiet:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__
                }
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


# Standard options that many commands share
common_options = {
    'verbose': click.option('-v', '--verbose', is_flag=True,
                           help='Show debug logging on stderr'),
    'quiet': click.option('-q', '--quiet', is_flag=True,
                         help='Suppress data output'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('verbose', 'quiet')
        def my_command(verbose, quiet):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
