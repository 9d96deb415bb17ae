import logging

from ...models.comparison_models import ComparisonSummary, VariantComparison
from ...models.parser_models import Variant

logger = logging.getLogger(__name__)


def _index_by_key(variants: list[Variant]) -> dict[tuple, Variant]:
    # Later duplicates replace earlier ones but keep the first-seen order
    index = {}
    for variant in variants:
        index[variant.key] = variant
    return index


def compare_variants(variants_a: list[Variant], variants_b: list[Variant]) -> VariantComparison:
    """Classify variants of two datasets as shared, unique to A or unique to B.

    Variants are identified by (chrom, pos, ref, alt). Each key is reported once,
    so duplicate rows within one dataset collapse to a single entry. The summary
    totals are the input sizes before that deduplication.
    """
    index_a = _index_by_key(variants_a)
    index_b = _index_by_key(variants_b)

    shared = []
    unique_to_a = []
    for key, variant in index_a.items():
        if key in index_b:
            shared.append(variant)
        else:
            unique_to_a.append(variant)

    unique_to_b = [variant for key, variant in index_b.items() if key not in index_a]

    summary = ComparisonSummary(
        shared_count=len(shared),
        unique_to_a_count=len(unique_to_a),
        unique_to_b_count=len(unique_to_b),
        total_a=len(variants_a),
        total_b=len(variants_b),
    )
    logger.info(
        f"Compared {summary.total_a} vs {summary.total_b} variants: "
        f"{summary.shared_count} shared, {summary.unique_to_a_count} only in A, "
        f"{summary.unique_to_b_count} only in B"
    )
    return VariantComparison(
        shared=shared, unique_to_a=unique_to_a, unique_to_b=unique_to_b, summary=summary
    )
