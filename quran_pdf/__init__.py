"""Quran PDF Builder

Assembles a cover page, selected chapters and a footer into a single
paginated A4 PDF.

Typical use:
    sections = load_sections(JsonDirectoryProvider("data"), [1, 112])
    result = QuranPDFPipeline().process(sections, CoverOptions(), sink=FileSink("out"))
"""

from .assembly_result import AssemblyResult
from .content_provider import JsonDirectoryProvider, load_sections
from .cover_options import CoverOptions
from .pipeline import FileSink, QuranPDFPipeline
from .section_data import Chapter, SectionData, Verse

__all__ = [
    'AssemblyResult',
    'Chapter',
    'CoverOptions',
    'FileSink',
    'JsonDirectoryProvider',
    'QuranPDFPipeline',
    'SectionData',
    'Verse',
    'load_sections',
]
