# Calc Core - Interface Module
from .repl import CalcREPL

__all__ = ['CalcREPL']
