"""Streamlit UI for TreeXL."""

from __future__ import annotations

import io

import streamlit as st

from TreeXL.converter import convert
from TreeXL.models import Conversion, SheetLayout
from TreeXL.tree_parser import MalformedInputError
from TreeXL.tree_renderer import render_tree
from TreeXL.xlsx_writer import build_rows, write_xlsx

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _qp(key: str, default: str = "") -> str:
    """Read a query parameter, returning *default* if absent."""
    params = st.query_params
    return params.get(key, default)


def _decode_upload(data: bytes) -> str | None:
    """Decode an uploaded listing, or return None if it is not UTF-8 text."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return None


def main() -> None:
    st.set_page_config(
        page_title="TreeXL",
        page_icon="📊",
        layout="wide",
    )

    st.title("TreeXL")
    st.caption(
        "Convert `tree` command output into a spreadsheet with one merged column per level."
    )

    uploaded = st.file_uploader("Tree output file", type=["txt", "log"])
    pasted = st.text_area(
        "...or paste tree output",
        height=240,
        placeholder=".\n├── src\n│   └── main.py\n└── README.md\n\n1 directory, 2 files",
    )

    include_hidden = st.checkbox(
        "Include hidden entries",
        value=_qp("hidden") == "1",
        help="Keep entries starting with '.' (such as .git) and everything below them.",
    )

    filename = st.text_input("Output file name", value="tree_output.xlsx")

    convert_clicked = st.button("Convert", type="primary", use_container_width=True)

    if convert_clicked:
        text = _decode_upload(uploaded.getvalue()) if uploaded is not None else pasted
        if text is None:
            st.error("The uploaded file is not UTF-8 text.")
        elif text.strip():
            _run_conversion(text, include_hidden, filename or "tree_output.xlsx")
        else:
            st.error("Please upload or paste tree output.")

    # Show previous result after rerun (e.g. download button click)
    if not convert_clicked and "result" in st.session_state:
        _show_result(st.session_state["result"])


def _run_conversion(text: str, include_hidden: bool, filename: str) -> None:
    try:
        result = convert(text.splitlines(), include_hidden=include_hidden)
    except MalformedInputError as exc:
        st.error(f"Line {exc.line_number}: {exc.reason}")
        st.code(exc.line, language="text")
        st.session_state.pop("result", None)
        return

    buffer = io.BytesIO()
    write_xlsx(result.document, result.merges, result.statistics, buffer)

    # Save result to session state so it survives reruns
    st.session_state["result"] = {
        "conversion": result,
        "xlsx": buffer.getvalue(),
        "filename": filename,
    }
    _show_result(st.session_state["result"])


def _show_result(result: dict) -> None:
    """Display counts, a preview table and the download button."""
    conversion: Conversion = result["conversion"]
    doc = conversion.document
    stats = conversion.statistics

    st.info(
        f"{len(doc.entries)} rows, {doc.max_depth + 1} level columns, "
        f"{len(conversion.merges)} merged ranges. "
        f"{stats.summary()} ({stats.source.value})."
    )

    st.download_button(
        label="Download spreadsheet",
        data=result["xlsx"],
        file_name=result["filename"],
        mime=XLSX_MIME,
        use_container_width=True,
    )

    layout = SheetLayout.for_document(doc)
    table = [
        dict(zip(layout.headers, [*levels, entry.full_path, ""]))
        for entry, levels in zip(doc.entries, build_rows(doc, layout))
    ]
    with st.expander("Preview", expanded=True):
        st.dataframe(table, use_container_width=True, hide_index=True)

    with st.expander("Retained listing", expanded=False):
        st.code(render_tree(doc), language="text")


if __name__ == "__main__":
    main()
