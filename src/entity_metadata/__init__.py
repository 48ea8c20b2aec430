"""
entity-metadata - declarative entity and DTO metadata.

Entity classes declare their table and columns with ``@table`` and ``Column``;
the ``EntityRegistry`` turns those declarations into ``EntitySchema`` objects
for query building, while ``Property`` declarations drive request payload
validation.
"""

__version__ = "0.1.0"
