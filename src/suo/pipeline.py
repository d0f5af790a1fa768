"""
Timeline pipeline: text -> tokens -> AST -> text.

parse / generate / transform are pure and synchronous. The *_async variants
run the same call on a thread pool and return a concurrent.futures.Future;
errors surface from future.result().

Usage:
    from suo.pipeline import transform, transform_file_async

    text = transform('hideall "--sync--"')
    future = transform_file_async("raid.txt")
    print(future.result())
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Optional, Union

from suo.config import SuoConfig
from suo.parser.generator import Generator, GeneratorOptions
from suo.parser.lexer import Lexer
from suo.parser.nodes import Program
from suo.parser.parser import Parser

logger = logging.getLogger(__name__)

Options = Union[GeneratorOptions, Dict[str, Any], None]

DEFAULT_MAX_WORKERS = 4


def _lexer_kwargs(config: Optional[SuoConfig]) -> Dict[str, Any]:
    return config.lexer_kwargs() if config is not None else {}


def _options(options: Options, config: Optional[SuoConfig]) -> GeneratorOptions:
    if options is None and config is not None:
        return config.generator_options()
    return GeneratorOptions.coerce(options)


def read_source(filepath: Union[str, Path]) -> str:
    """Read a UTF-8 timeline file; a leading BOM is dropped."""
    logger.debug(f"Reading {filepath}")
    with open(filepath, "r", encoding="utf-8-sig") as f:
        return f.read()


def parse(text: str, config: Optional[SuoConfig] = None, source_file: Optional[str] = None) -> Program:
    """Parse timeline text. Raises LexicalError or TimelineSyntaxError."""
    lexer = Lexer(text, source_file or "<unknown>", **_lexer_kwargs(config))
    return Parser(lexer, source_file=source_file or "").parse()


def generate(program: Program, options: Options = None, config: Optional[SuoConfig] = None) -> str:
    """Render a Program. Raises UnsupportedNodeError."""
    return Generator(program, _options(options, config)).generate()


def transform(text: str, options: Options = None, config: Optional[SuoConfig] = None) -> str:
    """parse then generate: a canonicalizing round-trip."""
    return generate(parse(text, config), options, config)


def parse_file(filepath: Union[str, Path], config: Optional[SuoConfig] = None) -> Program:
    return parse(read_source(filepath), config, source_file=str(filepath))


def transform_file(filepath: Union[str, Path], options: Options = None,
                   config: Optional[SuoConfig] = None) -> str:
    return generate(parse_file(filepath, config), options, config)


# =============================================================================
# Non-blocking variants
# =============================================================================

# Shared executor (initialized lazily)
_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """
    Get or create the shared executor used by the *_async functions.

    The executor is created lazily on first access.
    """
    global _executor

    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=DEFAULT_MAX_WORKERS, thread_name_prefix="suo")
        return _executor


def shutdown_executor(wait: bool = True):
    """Shutdown the shared executor. A later *_async call creates a new one."""
    global _executor

    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=wait)
            _executor = None


def _submit(executor: Optional[ThreadPoolExecutor], fn, *args) -> Future:
    pool = executor or get_executor()
    logger.debug(f"Submitting {fn.__name__}")
    return pool.submit(fn, *args)


def parse_async(text: str, config: Optional[SuoConfig] = None,
                executor: Optional[ThreadPoolExecutor] = None) -> Future:
    return _submit(executor, parse, text, config)


def generate_async(program: Program, options: Options = None, config: Optional[SuoConfig] = None,
                   executor: Optional[ThreadPoolExecutor] = None) -> Future:
    return _submit(executor, generate, program, options, config)


def transform_async(text: str, options: Options = None, config: Optional[SuoConfig] = None,
                    executor: Optional[ThreadPoolExecutor] = None) -> Future:
    return _submit(executor, transform, text, options, config)


def parse_file_async(filepath: Union[str, Path], config: Optional[SuoConfig] = None,
                     executor: Optional[ThreadPoolExecutor] = None) -> Future:
    return _submit(executor, parse_file, filepath, config)


def transform_file_async(filepath: Union[str, Path], options: Options = None,
                         config: Optional[SuoConfig] = None,
                         executor: Optional[ThreadPoolExecutor] = None) -> Future:
    return _submit(executor, transform_file, filepath, options, config)
