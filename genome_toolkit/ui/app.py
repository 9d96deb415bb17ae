import html
import logging
from typing import Optional

import streamlit as st

from genome_toolkit.constants.constants import *
from genome_toolkit.models.app_models import ToolkitState, ToolView, VariantSlot
from genome_toolkit.models.comparison_models import ComparisonBucket
from genome_toolkit.settings import settings
from genome_toolkit.tools.bio.gc_windows import chart_label_step, default_window_size
from genome_toolkit.tools.bio.motif_search import build_preview_segments
from genome_toolkit.ui.logic import AppLogic

logging.basicConfig(level=settings.log_level, format="%(levelname)s:%(name)s:%(message)s", force=True)
logger = logging.getLogger(__name__)

VIEW_LABELS = {
    ToolView.LOAD: "Load Data",
    ToolView.ANALYZER: "Sequence Analyzer",
    ToolView.MOTIF: "Motif Finder",
    ToolView.GC: "GC Visualizer",
    ToolView.VARIANTS: "Variant Comparator",
}

BUCKET_LABELS = {
    ComparisonBucket.SHARED: "Shared",
    ComparisonBucket.UNIQUE_TO_A: "Unique to A",
    ComparisonBucket.UNIQUE_TO_B: "Unique to B",
}


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, page_icon="🧬", layout="wide")
    st.title(f"🧬 {APP_TITLE}")

    app_logic = _initialize_session_state()

    _render_sidebar(app_logic.state)
    _render_error(app_logic.state)

    renderers = {
        ToolView.LOAD: _render_load_data,
        ToolView.ANALYZER: _render_sequence_analyzer,
        ToolView.MOTIF: _render_motif_finder,
        ToolView.GC: _render_gc_visualizer,
        ToolView.VARIANTS: _render_variant_comparator,
    }
    renderers[app_logic.state.active_view](app_logic)


def _initialize_session_state() -> AppLogic:
    if "toolkit_state" not in st.session_state:
        st.session_state.toolkit_state = ToolkitState()
    if "app_logic" not in st.session_state:
        st.session_state.app_logic = AppLogic(st.session_state.toolkit_state)
    return st.session_state.app_logic


def _on_view_change(state: ToolkitState) -> None:
    state.set_active_view(st.session_state.tool_view)


def _render_sidebar(state: ToolkitState) -> None:
    # State owns the active view; the widget mirrors it
    st.session_state.tool_view = state.active_view
    st.sidebar.radio(
        "Tools",
        list(VIEW_LABELS),
        key="tool_view",
        format_func=VIEW_LABELS.get,
        on_change=_on_view_change,
        args=(state,),
    )

    if state.active_dataset:
        st.sidebar.caption(f"Loaded: {state.active_dataset.file_name}")


def _render_error(state: ToolkitState) -> None:
    if state.error:
        st.error(state.error)


def _render_load_data(app_logic: AppLogic) -> None:
    limits = app_logic.limits
    max_mb = max(limits.max_fasta_size_mb, limits.max_fastq_size_mb)
    st.markdown("Upload a FASTA or FASTQ file to analyze.")

    uploaded_file = st.file_uploader(
        "Upload sequence file",
        type=list(FASTA_EXTENSIONS + FASTQ_EXTENSIONS),
        help=f"Accepted: .fasta, .fa, .fastq, .fq · Max {max_mb:g} MB",
    )
    if uploaded_file and st.button("Load", type="primary"):
        result = app_logic.load_sequence_upload(uploaded_file.getvalue(), uploaded_file.name)
        if result.success:
            st.rerun()

    dataset = app_logic.state.active_dataset
    if dataset:
        st.info(f"{dataset.file_name} · {dataset.format.value} · {dataset.length:,} bp")
        if st.button("Clear dataset", type="secondary"):
            app_logic.clear_sequence()
            st.rerun()


def _require_dataset(app_logic: AppLogic) -> bool:
    if app_logic.state.active_dataset is None:
        st.warning("No sequence loaded. Load a FASTA or FASTQ file first.")
        if st.button("Go to Load Data"):
            app_logic.state.set_active_view(ToolView.LOAD)
            st.rerun()
        return False
    return True


def _render_sequence_analyzer(app_logic: AppLogic) -> None:
    if not _require_dataset(app_logic):
        return

    dataset = app_logic.state.active_dataset
    stats = dataset.stats

    st.markdown(f"### {dataset.header or dataset.file_name}")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Length", f"{stats.length:,} bp")
    col2.metric("GC content", f"{stats.gc_percent}%")
    col3.metric("N content", f"{stats.n_percent}%")
    if stats.mean_quality is not None:
        col4.metric("Mean quality", stats.mean_quality)

    st.markdown("#### Base composition")
    st.bar_chart(
        [{"base": base, "count": count} for base, count in stats.base_counts.items()],
        x="base",
        y="count",
    )

    if stats.per_position_quality:
        st.markdown("#### Quality scores")
        st.line_chart(stats.per_position_quality)

    _render_preview(dataset.sequence)

    st.download_button(
        "Download FASTA",
        app_logic.active_sequence_as_fasta(),
        f"{dataset.file_name.rsplit('.', 1)[0]}.fasta",
        FASTA_MIME_TYPE,
    )


def _render_preview(sequence: str, matches: Optional[list] = None, motif_length: int = 0) -> None:
    max_bases = settings.preview_max_bases
    segments = build_preview_segments(sequence, matches or [], motif_length, max_bases)
    markup = "".join(
        f"<mark>{html.escape(segment.text)}</mark>" if segment.highlighted else html.escape(segment.text)
        for segment in segments
    )
    st.caption(f"Showing {min(len(sequence), max_bases):,} of {len(sequence):,} bp")
    st.markdown(
        f"<div style='font-family: monospace; word-break: break-all'>{markup}</div>",
        unsafe_allow_html=True,
    )


def _render_motif_finder(app_logic: AppLogic) -> None:
    if not _require_dataset(app_logic):
        return

    motif = st.text_input("Motif", placeholder="e.g. TATA")
    if not motif.strip():
        return

    matches = app_logic.search_motif(motif)
    st.success(f"Found {len(matches)} match(es) for {motif.strip().upper()}")

    _render_preview(app_logic.state.active_dataset.sequence, matches, len(motif.strip()))

    if matches:
        st.dataframe(
            [{"position": m.position, "context": m.context} for m in matches[:MOTIF_RESULTS_DISPLAY_LIMIT]],
            use_container_width=True,
        )


def _render_gc_visualizer(app_logic: AppLogic) -> None:
    if not _require_dataset(app_logic):
        return

    length = app_logic.state.active_dataset.length
    window_size = int(
        st.number_input("Window size (bp)", min_value=1, value=default_window_size(length), step=1)
    )

    if st.button("Calculate", type="primary"):
        windows = app_logic.compute_gc_series(window_size)
        if not windows:
            st.rerun()
        step = chart_label_step(len(windows))
        st.line_chart(
            [{"position": w.window_start + 1, "gc_percent": w.gc_percent} for w in windows[::step]],
            x="position",
            y="gc_percent",
        )
        st.caption(f"{len(windows):,} windows of {window_size} bp")


def _render_variant_comparator(app_logic: AppLogic) -> None:
    state = app_logic.state
    st.markdown("Upload two variant CSV files with columns chrom, pos, ref, alt.")

    col_a, col_b = st.columns(2)
    for column, slot in ((col_a, VariantSlot.A), (col_b, VariantSlot.B)):
        with column:
            uploaded_file = st.file_uploader(
                f"Variant file {slot.value}", type=list(CSV_EXTENSIONS), key=f"variants_{slot.value}"
            )
            if uploaded_file and not state.has_variant_upload(slot, uploaded_file.file_id):
                app_logic.load_variant_upload(
                    slot, uploaded_file.getvalue(), uploaded_file.name, uploaded_file.file_id
                )

    if st.button("Compare", type="primary", disabled=not (state.variant_file_a and state.variant_file_b)):
        app_logic.compare_loaded_variants()

    comparison = state.comparison
    if not comparison:
        return

    summary = comparison.summary
    c1, c2, c3 = st.columns(3)
    c1.metric("Shared", summary.shared_count)
    c2.metric("Unique to A", summary.unique_to_a_count, help=f"{summary.total_a} rows in A")
    c3.metric("Unique to B", summary.unique_to_b_count, help=f"{summary.total_b} rows in B")

    bucket = st.radio("Results", list(BUCKET_LABELS), format_func=BUCKET_LABELS.get, horizontal=True)
    st.dataframe([v.to_dict() for v in comparison.bucket(bucket)], use_container_width=True)

    app_logic.export_comparison(
        bucket,
        lambda file_name, data, mime: st.download_button("⬇️ Download CSV", data, file_name, mime),
    )


if __name__ == "__main__":
    main()
