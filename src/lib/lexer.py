"""
Custom Pygments lexer for macro template syntax

Highlights {{flags name::arg::arg}} tokens when macro text is shown in the
completion report.

Token types:
- Punctuation: Delimiters {{ }} and :: separators
- Keyword: Flag symbols (!, ?, ~, >, #) and the closing slash
- Name.Function: Macro identifiers
- String: Argument text
- Text: Everything outside macros
"""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import Text, Punctuation, Name, String, Keyword, Whitespace


class MacroLexer(RegexLexer):
    """
    Lexer for macro template text

    Example:
        Roll: {{!roll::1d20}}

    Tokens:
        {{ → Punctuation
        ! → Keyword
        roll → Name.Function
        :: → Punctuation
        1d20 → String
        }} → Punctuation
    """

    name = 'Macro'
    aliases = ['macro', 'stmacro']
    filenames = []

    tokens = {
        'root': [
            (r'\{\{', Punctuation, 'macro'),
            (r'[^{]+', Text),
            (r'\{', Text),
        ],

        'macro': [
            (r'\s+', Whitespace),
            # Closing tag: {{/name}}
            (r'(/)([a-zA-Z_][\w-]*)', bygroups(Keyword, Name.Function), 'args'),
            (r'[!?~>/#]', Keyword),
            (r'[a-zA-Z_][\w-]*', Name.Function, 'args'),
            (r'\}\}', Punctuation, '#pop'),
            (r'.', Text),
        ],

        'args': [
            (r'::', Punctuation),
            (r'\}\}', Punctuation, '#pop:2'),
            (r'\{\{', Punctuation, 'macro'),
            (r'[^:{}]+', String),
            (r'[:{}]', String),
        ],
    }


def get_lexer() -> MacroLexer:
    """
    Get the MacroLexer instance

    Returns:
        MacroLexer instance ready for use with Pygments
    """
    return MacroLexer()


def macro_highlight(text: str) -> str:
    """
    Highlight macro template text as inline HTML

    Args:
        text: Text containing {{...}} macros

    Returns:
        HTML fragment wrapped in <span class="macro-source">
    """
    formatter = HtmlFormatter(nowrap=True)
    body = highlight(text, get_lexer(), formatter).rstrip('\n')
    return f'<span class="macro-source">{body}</span>'


def highlight_css() -> str:
    """CSS rules for the highlighted macro source"""
    return HtmlFormatter(style='monokai').get_style_defs('.macro-source')
