"""
SEO Content Blueprint — Streamlit entry point.
Run with: streamlit run app.py

Flow: setup → analyzing → outline ready → editor (draft scoring).
"""
import asyncio

import pandas as pd
import streamlit as st

st.set_page_config(
    page_title="SEO Content Blueprint",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded",
)

from config.settings import COUNTRIES, DEFAULT_OUTPUT_LANGUAGE, OUTPUT_LANGUAGES  # noqa: E402
from core.credentials import get_credentials, render_credentials_sidebar  # noqa: E402
from core.errors import ContentIntelligenceError  # noqa: E402
from core.models import AppStep  # noqa: E402
from export.excel_exporter import default_filename, export_to_excel  # noqa: E402
from modules.content_intelligence import ContentIntelligenceClient  # noqa: E402

# ── sidebar: credentials ────────────────────────────────────────────────────
override = render_credentials_sidebar()

if "step" not in st.session_state:
    st.session_state["step"] = AppStep.SETUP


def _run(call, language: str):
    """Run one client coroutine to completion. A fresh client per run: its HTTP pool is loop-bound."""
    api_key = get_credentials(override).openai_api_key

    async def _go():
        async with ContentIntelligenceClient(api_key=api_key, language=language) as client:
            return await call(client)

    return asyncio.run(_go())


# ── Sidebar inputs ──────────────────────────────────────────────────────────
with st.sidebar:
    st.header("Blueprint settings")
    keywords = st.text_input("Core keywords", placeholder="best standing desk")
    region = st.selectbox("Target region", COUNTRIES, index=0)
    lang_codes = list(OUTPUT_LANGUAGES.keys())
    language = st.selectbox(
        "Output language",
        lang_codes,
        index=lang_codes.index(DEFAULT_OUTPUT_LANGUAGE),
        format_func=lambda c: OUTPUT_LANGUAGES[c],
    )
    urls_raw = st.text_area(
        "Competitor URLs (one per line)",
        placeholder="https://example.com/article-1\nhttps://example.com/article-2",
        height=160,
    )
    run_btn = st.button("🚀 Build blueprint", type="primary", use_container_width=True)
    if st.button("↺ Start over", use_container_width=True):
        for key in ("outline", "analysis", "images"):
            st.session_state.pop(key, None)
        st.session_state["step"] = AppStep.SETUP

# ── Header ──────────────────────────────────────────────────────────────────
st.title("🧭 SEO Content Blueprint")
st.markdown("Competitor analysis → content outline → draft scoring, with AI illustrations.")

# ── Execution ───────────────────────────────────────────────────────────────
if run_btn:
    urls = [u.strip() for u in urls_raw.strip().splitlines() if u.strip()]
    if not keywords.strip() or not urls:
        st.warning("Please enter keywords and at least one competitor URL.")
        st.stop()

    st.session_state["step"] = AppStep.ANALYZING
    with st.spinner("Analysing competitors…"):
        try:
            outline = _run(lambda c: c.request_competitor_analysis(keywords, region, urls), language)
        except (ContentIntelligenceError, ValueError) as e:
            st.session_state["step"] = AppStep.SETUP
            st.error(f"❌ {e}")
            st.stop()
    st.session_state["outline"] = outline
    st.session_state["images"] = {}
    st.session_state.pop("analysis", None)
    st.session_state["step"] = AppStep.OUTLINE_READY

if st.session_state["step"] == AppStep.SETUP:
    st.info("💡 Configure your OpenAI key in the sidebar, then enter keywords and competitor URLs.")

# ── Outline display ─────────────────────────────────────────────────────────
if "outline" in st.session_state:
    outline = st.session_state["outline"]
    images = st.session_state.setdefault("images", {})

    tab1, tab2, tab3, tab4 = st.tabs(["📑 Structure", "🖼️ Images", "❓ FAQ", "✍️ Draft editor"])

    with tab1:
        st.subheader("Suggested titles")
        for i, t in enumerate(outline.suggested_titles, 1):
            st.markdown(f"{i}. {t}")
        st.caption(f"Target word count: **{outline.target_word_count}**")
        for node in outline.structure:
            prefix = "##" if node.level == "H2" else "###"
            st.markdown(f"{prefix} {node.title}")
            st.markdown(node.description)
            st.caption(f"📝 {node.guidelines}")
            if node.source_competitor:
                st.caption(f"🔗 {node.source_competitor}")

    with tab2:
        st.metric("Planned images", outline.image_strategy.total_images)
        if outline.image_strategy.placements and st.button("🎨 Generate all images"):
            with st.spinner("Generating images…"):
                try:
                    uris = _run(lambda c: c.request_placement_images(outline.image_strategy), language)
                    images.update(enumerate(uris))
                except (ContentIntelligenceError, ValueError) as e:
                    st.error(f"❌ {e}")
        for idx, p in enumerate(outline.image_strategy.placements):
            with st.expander(f"After « {p.after_section} »", expanded=True):
                st.markdown(p.description)
                st.code(p.ai_prompt)
                if st.button("🎨 Generate", key=f"img_{idx}"):
                    with st.spinner("Generating image…"):
                        try:
                            images[idx] = _run(lambda c: c.request_image_generation(p.ai_prompt), language)
                        except (ContentIntelligenceError, ValueError) as e:
                            st.error(f"❌ {e}")
                if idx in images:
                    st.image(images[idx], use_container_width=True)

    with tab3:
        for f in outline.faqs:
            with st.expander(f.question):
                st.markdown(f.answer)
                st.caption(f"💬 {f.rationale}")

    with tab4:
        draft = st.text_area("Your draft", height=400, key="draft_text")
        if st.button("📊 Analyse draft", type="primary"):
            with st.spinner("Scoring draft…"):
                try:
                    st.session_state["analysis"] = _run(
                        lambda c: c.request_draft_analysis(outline, draft, keywords), language
                    )
                    st.session_state["step"] = AppStep.EDITOR
                except (ContentIntelligenceError, ValueError) as e:
                    st.error(f"❌ {e}")

        if "analysis" in st.session_state:
            analysis = st.session_state["analysis"]
            st.metric("Score", f"{analysis.score:g}/100")
            col1, col2 = st.columns(2)
            with col1:
                st.markdown("**Missing sections**")
                for s in analysis.missing_sections:
                    st.markdown(f"- {s}")
                st.markdown("**Keyword gaps**")
                for k in analysis.keyword_gaps:
                    st.markdown(f"- {k}")
            with col2:
                st.markdown("**Suggestions**")
                for s in analysis.suggestions:
                    st.markdown(f"- {s}")
            st.info(analysis.readability_feedback)

    # ── Summary + export ────────────────────────────────────────────────
    st.divider()
    st.dataframe(
        pd.DataFrame([{"Level": n.level, "Title": n.title} for n in outline.structure]),
        use_container_width=True,
    )
    xlsx_bytes = export_to_excel(outline=outline, analysis=st.session_state.get("analysis"))
    st.download_button(
        label="📥 Download XLSX",
        data=xlsx_bytes,
        file_name=default_filename("seo_blueprint"),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
