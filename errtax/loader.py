"""Load generated error modules in-process."""

from __future__ import annotations

import logging
import sys
import types

from .errors import CompileError

logger = logging.getLogger(__name__)


def load_module(source: str, name: str = "errtax_generated", register: bool = False) -> types.ModuleType:
    """Execute generated source into a fresh module and return it.

    This is where deferred errors show up: an unresolved kind reference
    raises NameError/AttributeError, an invalid identifier SyntaxError.
    Both are reported as CompileError.

    Args:
        source: Module text produced by ``Compiler.compile``.
        name: Module name (also used as the code object's filename).
        register: Also insert the module into ``sys.modules``.
    """
    module = types.ModuleType(name)
    try:
        code = compile(source, f"<{name}>", "exec")
        exec(code, module.__dict__)
    except SyntaxError as e:
        raise CompileError(f"Generated code is invalid: {e.msg}", line=e.lineno, column=e.offset) from e
    except (NameError, AttributeError, ImportError) as e:
        raise CompileError(f"Cannot load generated module {name}: {e}") from e
    if register:
        sys.modules[name] = module
    logger.debug("Loaded generated module %s", name)
    return module
