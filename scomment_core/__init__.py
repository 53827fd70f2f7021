"""
Structured Comment Core Library
===============================

Turns the structured comments embedded in a DTD into validated,
cross-linked markup fragments for the documentation generator:

- Identifier classification (parameter/general entity, element, attribute, module)
- Shorthand reference linking (`<elem>, @attr, %pe;, &ge;)
- Optional external comment converter (e.g. pandoc) with timeout
- Well-formedness validation of every section
- Annotation XML output

Architecture
------------

    scomment_core/
    ├── scomment.py    - SComment and identifier classification
    ├── processor.py   - Section dispatch (tags, pass-through, prose)
    ├── mapping/       - Link resolver
    ├── transform/     - External comment converter
    ├── validation/    - Well-formedness validation
    ├── xml/           - Fragment helpers and annotation output
    ├── config/        - Configuration management
    └── cli.py         - Batch command line

Usage
-----

    from scomment_core import SectionProcessor, EngineConfig

    config = EngineConfig()
    config.converter.command = "pandoc -f markdown -t html"
    processor = SectionProcessor(config)

    comment = processor.new_comment("<article>")
    comment.add_section("tags", "root")
    comment.add_section("notes", "Holds `<front> and `<body>.")

"""

__version__ = "1.0.0"

from scomment_core.errors import (
    SCommentError,
    MalformedSectionError,
    ConverterError,
    InitializationError,
)

from scomment_core.config.settings import (
    EngineConfig,
    ConverterConfig,
    LinkConfig,
    load_config,
    save_config,
)

from scomment_core.mapping.link_resolver import (
    LinkResolver,
    LinkRule,
)

from scomment_core.transform.converter import (
    CommentConverter,
    ConversionResult,
)

from scomment_core.validation.base import (
    BaseValidator,
    ValidationResult,
)

from scomment_core.validation.wellformed import (
    WellFormednessValidator,
)

from scomment_core.processor import (
    SectionProcessor,
    ProcessedSection,
)

from scomment_core.scomment import (
    SComment,
    CommentType,
    classify_identifier,
)

from scomment_core.xml.annotations import (
    comment_to_element,
    comments_to_xml,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "SCommentError",
    "MalformedSectionError",
    "ConverterError",
    "InitializationError",
    # Config
    "EngineConfig",
    "ConverterConfig",
    "LinkConfig",
    "load_config",
    "save_config",
    # Linking
    "LinkResolver",
    "LinkRule",
    # Transform
    "CommentConverter",
    "ConversionResult",
    # Validation
    "BaseValidator",
    "ValidationResult",
    "WellFormednessValidator",
    # Engine
    "SectionProcessor",
    "ProcessedSection",
    "SComment",
    "CommentType",
    "classify_identifier",
    # Output
    "comment_to_element",
    "comments_to_xml",
]
