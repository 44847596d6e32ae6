import asyncio
import logging
import os

import streamlit as st
from dotenv import load_dotenv

from optimizer.controller import DOWNLOAD_NOTICE, BytesFile, WorkflowController
from optimizer.state import WorkflowState

load_dotenv()
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

PLACEHOLDER = 'Click "Optimize Resume" to get started'


def get_controller() -> WorkflowController:
    # One controller per browser session
    if "controller" not in st.session_state:
        st.session_state.controller = WorkflowController()
        st.session_state.uploader_key = 0
        st.session_state.loaded_upload = None
    return st.session_state.controller


def show_notice(notice):
    if notice is None:
        return
    if notice.destructive:
        st.error(f"**{notice.title}** {notice.description}")
    else:
        st.toast(f"**{notice.title}** {notice.description}")


def render_upload(controller: WorkflowController):
    st.subheader("Transform Your Resume with AI")
    st.write("Upload your resume and let our AI analyze and improve it with professional suggestions")

    uploaded = st.file_uploader(
        "Upload your resume",
        type=["pdf", "docx", "txt", "tex"],
        help="Supports PDF, DOCX, TXT, and LaTeX formats",
        key=f"uploader-{st.session_state.uploader_key}",
    )
    if uploaded is not None:
        upload_id = (uploaded.name, uploaded.size)
        if upload_id != st.session_state.loaded_upload:
            st.session_state.notice = asyncio.run(controller.load_file(BytesFile.from_upload(uploaded)))
            st.session_state.loaded_upload = upload_id
            st.rerun()

    cols = st.columns(3)
    cols[0].markdown("**AI-Powered Analysis**\n\nAdvanced AI reviews your resume and suggests improvements")
    cols[1].markdown("**Multiple Formats**\n\nSupport for PDF, DOCX, TXT, and even LaTeX documents")
    cols[2].markdown("**Easy Export**\n\nDownload your optimized resume in your preferred format")


def render_optimized(controller: WorkflowController):
    if controller.optimized_text:
        st.code(controller.optimized_text, language=None, wrap_lines=True)
    else:
        st.info(PLACEHOLDER)


def render_comparison(controller: WorkflowController):
    document = controller.document
    header, actions = st.columns([3, 2])
    header.subheader("Resume Analysis")
    header.caption(f"File: {document.name} ({document.size_kb} KB)")

    new_col, action_col = actions.columns(2)
    if new_col.button("Upload New", key="upload_new"):
        controller.reset()
        st.session_state.uploader_key += 1
        st.session_state.loaded_upload = None
        st.rerun()

    if controller.can_export:
        artifact = controller.export_result()
        if action_col.download_button(
            "Download",
            data=artifact.data,
            file_name=artifact.filename,
            mime=artifact.media_type,
        ):
            show_notice(DOWNLOAD_NOTICE)
    elif action_col.button(
        "Optimize Resume", key="optimize", type="primary", disabled=not controller.can_optimize
    ):
        with st.spinner("Analyzing and optimizing your resume..."):
            st.session_state.notice = asyncio.run(controller.optimize())
        st.rerun()

    side_by_side, optimized_only = st.tabs(["Side by Side", "Optimized Only"])
    with side_by_side:
        left, right = st.columns(2)
        with left:
            st.markdown("**Original Resume**")
            st.code(controller.original_text or "No content available", language=None, wrap_lines=True)
        with right:
            st.markdown("**Optimized Resume**")
            render_optimized(controller)
    with optimized_only:
        st.markdown("**Optimized Resume**")
        render_optimized(controller)


def main():
    st.set_page_config(page_title="Resume Optimizer", layout="wide")
    st.title("Resume Optimizer")
    st.caption("AI-powered resume enhancement")

    controller = get_controller()
    show_notice(st.session_state.pop("notice", None))
    if controller.state is WorkflowState.EMPTY:
        render_upload(controller)
    else:
        render_comparison(controller)


main()
