"""Syntax tree nodes and a generator that renders them as Python source code."""