"""
Report Generator
Renders parsed configurations as JSON documents or HTML tree views
using Jinja2 templates.
"""

import os
import json
from collections import Counter
from datetime import datetime
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape  # pyre-ignore

from apacheconf.models import Document  # pyre-ignore
from apacheconf.parser_engine import ParsedConfig  # pyre-ignore


REPORT_VERSION = "1.0.0"

BUILTIN_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>httpd.conf &mdash; {{ config.filename }}</title>
<style>
    body { font-family: -apple-system, "Segoe UI", sans-serif; margin: 2rem; color: #222; }
    table.meta td { padding: 2px 12px 2px 0; }
    ul.tree { list-style: none; padding-left: 1.25rem; border-left: 1px solid #ddd; }
    code.kind { color: #8a2be2; }
    code.name { color: #005a9c; font-weight: 600; }
    .args { font-family: monospace; }
</style>
</head>
<body>
<h1>{{ config.filename }}</h1>
<table class="meta">
    <tr><td>Path</td><td><code>{{ config.path }}</code></td></tr>
    <tr><td>SHA-256</td><td><code>{{ config.file_hash }}</code></td></tr>
    <tr><td>Directives</td><td>{{ summary.directives }}</td></tr>
    <tr><td>Blocks</td><td>{{ summary.blocks }}</td></tr>
    <tr><td>Max depth</td><td>{{ summary.max_depth }}</td></tr>
</table>
<ul class="tree">
{%- for entry in entries recursive %}
    <li>
    {%- if entry.is_block %}
        <code class="kind">&lt;{{ entry.kind }}{% if entry.header_text() %} {{ entry.header_text() }}{% endif %}&gt;</code>
        {%- if entry.entries %}
        <ul class="tree">{{ loop(entry.entries) }}</ul>
        {%- endif %}
    {%- else %}
        <code class="name">{{ entry.name }}</code> <span class="args">{{ entry.arguments | join(' ') }}</span>
    {%- endif %}
    </li>
{%- endfor %}
</ul>
<p><small>Generated {{ timestamp }} &bull; apacheconf v{{ version }}</small></p>
</body>
</html>
"""


class ReportGenerator:
    """Generates JSON and HTML reports for parsed configurations."""

    def __init__(self, templates_dir: Optional[str] = None):
        self.templates_dir = templates_dir

    def generate_html(self, parsed: ParsedConfig, output_path: str) -> str:
        """
        Generate an HTML tree view of a parsed configuration.

        Args:
            parsed: Parsed configuration and its source.
            output_path: Path to write the HTML file.

        Returns:
            Path to the generated HTML file.
        """
        html_content = self.render_html(parsed)

        os.makedirs(os.path.dirname(output_path) if os.path.dirname(output_path) else '.', exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html_content)

        return output_path

    def generate_json(self, parsed: ParsedConfig, output_path: str) -> str:
        """Generate a JSON file for programmatic use."""
        data = self.to_dict(parsed)

        os.makedirs(os.path.dirname(output_path) if os.path.dirname(output_path) else '.', exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=str)

        return output_path

    def render_html(self, parsed: ParsedConfig) -> str:
        """Render with templates_dir/report.html if present, else the built-in template."""
        if self.templates_dir and os.path.exists(os.path.join(self.templates_dir, 'report.html')):
            env = Environment(
                loader=FileSystemLoader(self.templates_dir),
                autoescape=select_autoescape(['html']),
            )
            template = env.get_template('report.html')
        else:
            env = Environment(autoescape=True)
            template = env.from_string(BUILTIN_TEMPLATE)
        return template.render(**self._template_context(parsed))

    def _template_context(self, parsed: ParsedConfig) -> dict:
        """Build template context from the parsed configuration."""
        return {
            "config": parsed.source,
            "entries": parsed.document.entries,
            "summary": self.summarize(parsed.document),
            "timestamp": datetime.now().isoformat(),
            "version": REPORT_VERSION,
        }

    def summarize(self, document: Document) -> dict:
        """Count directives and blocks, and measure nesting depth."""
        directives = 0
        kinds = Counter()
        max_depth = 0

        for path, entry in document.walk():
            if entry.is_block:
                kinds[entry.kind] += 1
                max_depth = max(max_depth, len(path) + 1)
            else:
                directives += 1

        return {
            "entries": len(document),
            "directives": directives,
            "blocks": sum(kinds.values()),
            "block_kinds": dict(kinds),
            "max_depth": max_depth,
        }

    def to_dict(self, parsed: ParsedConfig) -> dict:
        """Convert a ParsedConfig to a JSON-serializable dictionary."""
        return {
            "apacheconf_version": REPORT_VERSION,
            "timestamp": datetime.now().isoformat(),
            "config_file": parsed.source.filename,
            "config_path": parsed.source.path,
            "config_hash": parsed.source.file_hash,
            "file_size": parsed.source.file_size,
            "summary": self.summarize(parsed.document),
            "entries": parsed.document.as_list(),
        }
