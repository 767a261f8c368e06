from .driver import CompilerDriver
