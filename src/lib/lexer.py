"""
Pygments lexer for TeX math source

Splits the text between math delimiters into tokens for the input jax.
It is a tokenizer, not a TeX grammar: it knows about control sequences,
braces, scripts, numbers and letters, and nothing about macro arguments.

Token types:
- Name.Function: Control sequences (e.g., \\frac, \\alpha)
- Operator: Operator control sequences (e.g., \\times, \\leq) and
  operator characters (+ - = < > ...)
- Punctuation: Group braces { and }
- Keyword: Script markers ^ and _
- Number: Numbers (e.g., 3.14)
- Name: Single letters
- Text: Whitespace
- Error: Anything else
"""

from pygments.lexer import RegexLexer, words
from pygments.token import (
    Text,
    Punctuation,
    Name,
    Keyword,
    Number,
    Operator,
    Error,
)


# Control sequences that render as operators rather than identifiers
OPERATOR_COMMANDS = (
    'times', 'div', 'cdot', 'pm', 'mp', 'leq', 'le', 'geq', 'ge', 'neq', 'ne',
    'approx', 'equiv', 'sim', 'to', 'rightarrow', 'leftarrow', 'Rightarrow',
    'Leftarrow', 'in', 'notin', 'subset', 'supset', 'cup', 'cap', 'sum',
    'prod', 'int', 'oint', 'lim', 'infty', 'partial', 'nabla', 'ldots',
    'cdots',
)

# Non-letter control sequences that render as operators (spacing, escaped braces)
OPERATOR_SYMBOLS = (',', ';', '!', ' ', '{', '}', '|')


class TexMathLexer(RegexLexer):
    """
    Lexer for the body of a TeX math expression

    Example:
        x^{2} + \\alpha

    Tokens:
        x → Name
        ^ → Keyword
        { → Punctuation
        2 → Number
        } → Punctuation
        + → Operator
        \\alpha → Name.Function
    """

    name = 'TeX math'
    aliases = ['texmath']

    tokens = {
        'root': [
            (r'\s+', Text),

            # Operator control sequences (\times, \leq, \{, \, ...)
            (words(OPERATOR_COMMANDS, prefix=r'\\', suffix=r'(?![a-zA-Z])'), Operator),
            (words(OPERATOR_SYMBOLS, prefix=r'\\'), Operator),

            # Other control sequences (\frac, \alpha, \mathrm, ...)
            (r'\\[a-zA-Z]+', Name.Function),
            (r'\\.', Name.Function),

            # Scripts
            (r'[\^_]', Keyword),

            # Group braces
            (r'[{}]', Punctuation),

            (r'\d+(?:\.\d+)?', Number),
            (r'[a-zA-Z]', Name),
            (r"[-+*/=<>!,;:.'|()\[\]]", Operator),

            (r'.', Error),
        ],
    }
