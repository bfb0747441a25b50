"""
Completion preview report

Writes a standalone HTML page showing, for each probe, the highlighted
macro text, its parse context, the completion list and the detail panel
of the top option.
"""

import html
from pathlib import Path
from typing import Any, Dict, List

from ..config import appsettings
from ..models.options import ProbeCompletion
from .lexer import highlight_css, macro_highlight
from .log import LOG
from .nodes import UINode, node


REPORT_CSS = """
    body { font-family: sans-serif; background: #1e1e1e; color: #ddd; }
    .probe { border: 1px solid #444; margin: 1em 0; padding: 0.5em 1em; }
    .probe-context { font-family: monospace; font-size: 0.85em; color: #aaa; }
    .probe-options { list-style: none; padding-left: 0; }
    .item { display: flex; gap: 0.5em; }
    .stopgap { flex: 1; }
    .macro-ac-warning { color: #f0a030; }
    .macro-arg.current { font-weight: bold; }
"""


class ReportWriter:
    """
    HTML report writer for probe completions

    Attributes:
        completions: Completion results, one per probe
        output_dir: Directory receiving index.html
    """

    def __init__(self, completions: List[ProbeCompletion], output_dir: str) -> None:
        self.completions = completions
        self.output_dir = Path(output_dir)

    def write(self) -> Dict[str, Any]:
        """
        Render and write the report

        Returns:
            dict with status, output_file, probe_count and warning_count
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        sections = '\n'.join(self.probe_render(index, completion)
                             for index, completion in enumerate(self.completions, start=1))
        output_file = self.output_dir / "index.html"
        output_file.write_text(self.htmlDocument_build(sections), encoding='utf-8')
        LOG(f"Wrote {output_file}", level=2)

        return {
            'status': True,
            'output_file': str(output_file),
            'probe_count': len(self.completions),
            'warning_count': sum(1 for completion in self.completions if completion.warning),
        }

    def context_render(self, completion: ProbeCompletion) -> UINode:
        """Compact dump of the parse context fields"""
        context = completion.context
        fields = {
            'identifier': context.identifier,
            'flags': ''.join(context.flags),
            'currentFlag': context.current_flag,
            'args': list(context.args),
            'currentArgIndex': context.current_arg_index,
            'isInFlagsArea': context.is_in_flags_area,
            'isTypingSeparator': context.is_typing_separator,
            'separatorCount': context.separator_count,
        }
        dump = node('div', 'probe-context')
        for name, value in fields.items():
            dump.append(node('span', text=f"{name}={value!r} "))
        return dump

    def probe_render(self, index: int, completion: ProbeCompletion) -> str:
        """HTML section for one probe"""
        source = macro_highlight(appsettings.token_wrap(completion.context.full_text))
        options = node('ul', 'probe-options').append(*(option.render_item() for option in completion.options))
        details = completion.options[0].render_details().html() if completion.options else ''

        return f"""    <section class="probe" id="probe-{index}">
        <h2>Probe {index}: <code>{html.escape(completion.line)}</code></h2>
        <div class="probe-source">{source}</div>
        {self.context_render(completion).html()}
        {options.html()}
        <div class="probe-details">{details}</div>
    </section>"""

    def htmlDocument_build(self, content: str) -> str:
        """Wrap probe sections in a complete HTML document"""
        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Macro completion report</title>
    <style>{REPORT_CSS}
{highlight_css()}
    </style>
</head>
<body>
{content}
</body>
</html>"""
