"""
Data models for the catalog migration.

This module contains pure data classes with no business logic.
"""

from .export import Attachment, MetaBag, RawItem, TaxonomyTerm
from .product import (
    Combination,
    MigrationOutcome,
    OptionGroup,
    OptionValue,
    OutcomeStatus,
    PipelineStage,
    Product,
)

__all__ = [
    # Export records
    'Attachment',
    'MetaBag',
    'RawItem',
    'TaxonomyTerm',
    # Catalog
    'Product',
    'OptionGroup',
    'OptionValue',
    'Combination',
    # Results
    'MigrationOutcome',
    'OutcomeStatus',
    'PipelineStage',
]
