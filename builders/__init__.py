"""
Builders library for computation expressions.

Compose effectful, suspendable or partial computations through one builder
protocol instead of nesting control flow by hand.

Architecture:
- Builder - capability set (bind, return_, delay, combine, try_with, using, ...)
- Four reference monads plugged into it:
    maybe          - eager Option (kungfu Some / Nothing)
    delayed_maybe  - Option behind an explicit thunk (DelayedOption)
    eventually     - step-resumable state machine (Done / NotYetDone)
    task           - async task (kungfu LazyCoroResult)
- Dispatch - AST nodes lowered onto any builder (`builder(expr)`)
  or generator do-notation (`@builder.do`)
"""

# Core types
from ._types import Closeable, Disposable, OkOrException, Task

# Errors
from ._errors import StepLimitExceededError, UnsupportedOperationError

# Internal helpers (for custom builders)
from . import _helpers

# Builder protocol
from .builder import Builder

# AST (dispatch)
from . import ast
from .ast import (
    Expr,
    compile_expr,
    do,
    effect,
    for_each,
    let,
    ret,
    ret_from,
    seq,
    try_finally,
    try_with,
    use,
    when,
    while_,
    zero,
)

# Monads
from . import delayed, option, resumable, tasks
from .option import MaybeBuilder, maybe
from .delayed import DelayedOption, DelayedOptionBuilder, delayed_maybe
from .resumable import (
    Done,
    DrivePolicy,
    Eventually,
    EventuallyBuilder,
    NotYetDone,
    eventually,
    interleave,
    run_to_completion,
    step,
    steps,
)
from .tasks import TaskBuilder, run_synchronously, task

__all__ = (
    # Types
    "Closeable",
    "Disposable",
    "OkOrException",
    "Task",
    # Errors
    "StepLimitExceededError",
    "UnsupportedOperationError",
    # Helpers
    "_helpers",
    # Builder
    "Builder",
    # AST
    "ast",
    "Expr",
    "compile_expr",
    "do",
    "effect",
    "for_each",
    "let",
    "ret",
    "ret_from",
    "seq",
    "try_finally",
    "try_with",
    "use",
    "when",
    "while_",
    "zero",
    # Option
    "option",
    "MaybeBuilder",
    "maybe",
    # Delayed option
    "delayed",
    "DelayedOption",
    "DelayedOptionBuilder",
    "delayed_maybe",
    # Eventually
    "resumable",
    "eventually",
    "Done",
    "DrivePolicy",
    "Eventually",
    "EventuallyBuilder",
    "NotYetDone",
    "interleave",
    "run_to_completion",
    "step",
    "steps",
    # Task
    "tasks",
    "TaskBuilder",
    "run_synchronously",
    "task",
)
