## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Symbol, Location, OpCode, Instruction, Program, DEFAULT_TAPE_SIZE
from .errors import *
from .machine import Machine
from .runtime import Runtime

_RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)
