"""rdcalc: a line-oriented calculator built on a backtracking recursive-descent parser.

Each input line is parsed into an expression tree (literals, parenthesized
groups, + - * / ^) and reduced to a float. Lines that do not parse produce a
diagnostic on stderr; 'quit' ends the session.

Usage:
    python -m rdcalc                       # Read expressions from stdin
    python -m rdcalc eval "2 + 3 * 4"      # Evaluate arguments
    python -m rdcalc tree "(2 + 3) * 4"    # Show the parse tree
"""
