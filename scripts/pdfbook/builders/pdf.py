"""
PDF builder.

Pandoc renders the assembled markdown straight to PDF through XeLaTeX.
Typesetting, fonts and the table of contents are left to pandoc and the
header include file.
"""

from pdfbook.builders.base import BaseBuilder


PANDOC = "pandoc"

ENGINE_HINT = "install TeX Live/MiKTeX with XeLaTeX"


class PdfBuilder(BaseBuilder):
    format_name = "PDF"

    @property
    def engine(self):
        return self.config.pdf["engine"]

    def check_tools(self):
        """Both pandoc and the PDF engine must be on PATH."""
        self.check_tool(PANDOC)
        self.check_tool(self.engine, ENGINE_HINT)

    def command(self):
        config = self.config
        cmd = [
            PANDOC,
            self.source,
            "-f", config.from_str,
            "-o", self.output_file,
            "--toc", f"--toc-depth={config.toc_depth}",
            f"--include-in-header={config.path(config.header)}",
            f"--pdf-engine={self.engine}",
        ]
        cmd.extend(config.variable_args())
        return cmd

    def build(self):
        self.header()
        self.log(f"  Input:  {self.source}")
        self.log(f"  Format: {self.config.from_str}")

        self.exec_cmd(self.command(), "PDF generation")

        print(f"OK: wrote {self.output_file}")
        return True
