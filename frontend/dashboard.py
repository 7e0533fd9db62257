"""Streamlit admin page for the Call Center Dashboard"""

import asyncio
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from config.settings import settings
from core import get_logger, setup_logging
from forms import DialogConfig, SlideDialog
from frontend.admin_forms import FORMS
from frontend.form_dialog import StreamlitSlideDialog


class CallCenterDashboard:
    """Admin page listing users, facilities and escalations, with slide dialogs for edits"""

    def __init__(self):
        self.logger = get_logger(__name__)

        st.set_page_config(
            page_title=settings.app_name,
            page_icon="📞",
            layout="wide",
            initial_sidebar_state="expanded"
        )

    def run(self) -> None:
        """Run the dashboard"""
        try:
            self._render_dashboard()
        except Exception as e:
            st.error(f"Dashboard error: {e}")
            self.logger.error(f"Dashboard error: {e}", exc_info=True)

    def _records(self, form_key: str) -> List[Dict[str, Any]]:
        return st.session_state.setdefault(f"records-{form_key}", [])

    def _dialog(self, form_key: str) -> SlideDialog:
        """One dialog per form, kept across Streamlit reruns"""
        state_key = f"dialog-{form_key}"
        if state_key not in st.session_state:
            title, build_fields = FORMS[form_key]
            st.session_state[state_key] = SlideDialog(
                fields=build_fields(),
                on_save=self._save_handler(form_key),
                config=DialogConfig.from_settings(title=title),
            )
        return st.session_state[state_key]

    def _save_handler(self, form_key: str):
        async def save(values: Dict[str, Any]) -> None:
            # Stand-in for the backend API client
            await asyncio.sleep(0)
            self._records(form_key).append(dict(values))
            self.logger.info(f"Saved {form_key} record")
        return save

    def _render_dashboard(self) -> None:
        st.title("📞 Call Center Administration")
        st.markdown("---")

        tabs = st.tabs(["👥 Users", "🏥 Facilities", "⚠️ Escalations"])
        for tab, form_key in zip(tabs, ("user", "facility", "escalation")):
            with tab:
                self._render_section(form_key)

    def _render_section(self, form_key: str) -> None:
        title, _ = FORMS[form_key]
        dialog = self._dialog(form_key)

        if st.button(title, key=f"open-{form_key}", disabled=dialog.is_open):
            dialog.open()
            st.rerun()

        records = self._records(form_key)
        if records:
            st.dataframe(pd.DataFrame(records), use_container_width=True, hide_index=True)
        else:
            st.info("No records yet")

        StreamlitSlideDialog(dialog, key=form_key).render()


def main():
    """Main function to run the dashboard"""
    setup_logging(**settings.get_logging_settings())
    dashboard = CallCenterDashboard()
    dashboard.run()


if __name__ == "__main__":
    main()
