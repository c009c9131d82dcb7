import pytest

from pdfbook.config import BookConfig
from pdfbook.errors import ConfigError


def test_defaults(project):
    config = BookConfig.load()
    assert config.output == "权力48法则byGPT5.pdf"
    assert config.fonts["main"] == "SimSun"
    assert config.fonts["sans"] == "Microsoft YaHei"
    assert config.fonts["mono"] == "Consolas"
    assert config.fontsize == "12pt"
    assert config.header == "pandoc_header.tex"
    assert config.include_categories is False
    assert config.hard_line_breaks is False
    assert config.from_str == "markdown+raw_tex"
    assert config.toc_depth == 1


def test_environment(project):
    env = {
        "OUT": "book.pdf",
        "CJK_MAINFONT": "Noto Serif CJK SC",
        "FONTSIZE": "11pt",
        "HEADER_TEX": "hdr.tex",
        "MD_HARD_LINE_BREAKS": "1",
        "BOOK_INCLUDE_CATEGORIES": "1",
    }
    config = BookConfig.load(environ=env)
    assert config.output == "book.pdf"
    assert config.fonts["main"] == "Noto Serif CJK SC"
    assert config.fonts["sans"] == "Microsoft YaHei"
    assert config.fontsize == "11pt"
    assert config.header == "hdr.tex"
    assert config.from_str == "markdown+raw_tex+hard_line_breaks"
    assert config.toc_depth == 2


def test_flag_requires_exact_one(project):
    config = BookConfig.load(environ={"BOOK_INCLUDE_CATEGORIES": "yes"})
    assert config.include_categories is False


def test_yaml_then_env_then_overrides(project, write):
    write("book.yaml", "output: yaml.pdf\nfontsize: 10pt\nfonts:\n  mono: Menlo\npdf:\n  margin: 2cm\n")
    config = BookConfig.load(environ={"FONTSIZE": "14pt"}, overrides={"output": "cli.pdf"})
    assert config.output == "cli.pdf"
    assert config.fontsize == "14pt"
    assert config.fonts["mono"] == "Menlo"
    assert config.fonts["main"] == "SimSun"
    assert config.pdf["margin"] == "2cm"
    assert config.pdf["papersize"] == "a4"


def test_yaml_boolean_flag(project, write):
    write("book.yaml", "include_categories: true\n")
    assert BookConfig.load(environ={}).include_categories is True


def test_env_flag_off_beats_yaml(project, write):
    write("book.yaml", "include_categories: true\n")
    config = BookConfig.load(environ={"BOOK_INCLUDE_CATEGORIES": "0"})
    assert config.include_categories is False


def test_yaml_must_be_mapping(project, write):
    write("book.yaml", "- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        BookConfig.load(environ={})


def test_yaml_section_must_be_mapping(project, write):
    write("book.yaml", "fonts: SimSun\n")
    with pytest.raises(ConfigError, match="fonts"):
        BookConfig.load(environ={})


def test_invalid_yaml(project, write):
    write("book.yaml", "output: [unclosed\n")
    with pytest.raises(ConfigError):
        BookConfig.load(environ={})


def test_immutable(project):
    config = BookConfig.load(environ={})
    with pytest.raises(AttributeError):
        config.output = "x.pdf"
    with pytest.raises(TypeError):
        config.fonts["main"] = "Arial"


def test_variable_args(project):
    args = BookConfig.load(environ={}).variable_args()
    assert args == [
        "-V", "fontsize=12pt",
        "-V", "geometry:margin=2.2cm",
        "-V", "papersize=a4",
        "-V", "linestretch=1.25",
        "-V", "CJKmainfont=SimSun",
        "-V", "CJKsansfont=Microsoft YaHei",
        "-V", "CJKmonofont=Consolas",
    ]
