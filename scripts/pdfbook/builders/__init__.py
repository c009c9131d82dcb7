from pdfbook.builders.pdf import PdfBuilder

__all__ = ["PdfBuilder"]
