"""
Sudoku solver: constraint propagation, with guessing where necessary.
"""
