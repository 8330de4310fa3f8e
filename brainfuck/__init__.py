"""
An interpreter for the eight-command tape language (brainfuck).

A program is a string; only `><+-.,[]` carry meaning and everything else
is a comment. Programs run against a `Tape` of wrapping unsigned cells.

>>> import brainfuck
>>> io = brainfuck.BufferIoHandler()
>>> ctx = brainfuck.Interpreter().run("++++++++[>++++++++<-]>+.", io=io)
>>> io.text
'A'
"""

from .errors import *
from .interpreter import *
from .streams import *
from .tape import *
