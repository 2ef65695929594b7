"""Personal AQI Tracker - Gradio web app.

Screens:
- Login
- Onboarding wizard (3 steps)
- Dashboard (live AQI, forecast, advisory)
- Simulation chat ("what-if" scenarios)
- Profile editor panel (overlay)

All state lives in one AppController per browser session; every handler
performs one controller transition and re-renders the whole page. Handlers
that wait on Gemini render twice: once while the request is in flight and
once when it settles.
"""
import argparse
import logging

import gradio as gr

from config.settings import APP_TITLE
from core.controller import AppController, track_progress
from core.errors import AQITrackerError
from core.observability import get_metrics_summary
from models.profile import CommuteMode, Sensitivity, UserProfile
from models.session import AppView
from presentation import (
    render_dashboard, render_metrics_footer, render_profile_summary, render_transcript,
)
from services.onboarding import OnboardingWizard, TOTAL_STEPS
from tools.aqi_levels import COMMUTE_EXPOSURE, HEALTH_CONDITION_OPTIONS

logger = logging.getLogger(__name__)

SENSITIVITY_CHOICES = [(s.value.capitalize(), s.value) for s in Sensitivity]
COMMUTE_CHOICES = [
    (f"{info['label']} - {info['exposure']}", mode.value)
    for mode, info in COMMUTE_EXPOSURE.items()
]

THEME_BADGES = {
    "neutral": "",
    "unknown": "⚪ No reading yet",
    "good": "🟢 Good air",
    "moderate": "🟡 Moderate air",
    "sensitive": "🟠 Unhealthy for sensitive groups",
    "unhealthy": "🔴 Unhealthy air",
    "very_unhealthy": "🟣 Very unhealthy air",
    "hazardous": "🟤 Hazardous air",
}


class UISession:
    """Per-browser-session holder for the controller and onboarding wizard."""

    def __init__(self):
        self.controller = AppController()
        self.controller.start()
        self.wizard = OnboardingWizard()
        self.notice = ""


def _session(session):
    return session if session is not None else UISession()


with gr.Blocks(title=APP_TITLE) as demo:
    session_state = gr.State(None)

    header = gr.Markdown(f"# 🌬️ {APP_TITLE}")
    notice = gr.Markdown("")

    # ========== Login panel ==========
    with gr.Column(visible=True) as login_panel:
        gr.Markdown(
            "Your AI-powered companion for monitoring air quality, predicting "
            "health risks, and navigating climate impact."
        )
        login_button = gr.Button("Get Started", variant="primary")
        gr.Markdown("Powered by Gemini AI • Real-time India Focus")

    # ========== Onboarding panel ==========
    with gr.Column(visible=False) as onboarding_panel:
        onboarding_progress = gr.Markdown("")
        with gr.Column(visible=True) as step1:
            gr.Markdown("### Tell us about yourself")
            ob_name = gr.Textbox(label="Your Name")
            ob_city = gr.Textbox(label="City", placeholder="e.g. New Delhi, Mumbai")
        with gr.Column(visible=False) as step2:
            gr.Markdown("### Health profile")
            ob_conditions = gr.CheckboxGroup(
                label="Health conditions", choices=HEALTH_CONDITION_OPTIONS
            )
            ob_custom = gr.Textbox(label="Other condition (optional)")
            ob_sensitivity = gr.Radio(
                label="Pollution sensitivity", choices=SENSITIVITY_CHOICES, value="moderate"
            )
        with gr.Column(visible=False) as step3:
            gr.Markdown("### How do you commute?")
            ob_commute = gr.Radio(
                label="Commute mode", choices=COMMUTE_CHOICES, value="public_transport"
            )
        with gr.Row():
            ob_back = gr.Button("Back")
            ob_next = gr.Button("Continue", variant="primary")

    # ========== API key panel ==========
    with gr.Column(visible=False) as key_panel:
        gr.Markdown(
            "## API Connection Required\n"
            "To provide personalized air quality insights and climate simulations, "
            "this app requires access to the Gemini API."
        )
        key_input = gr.Textbox(label="Gemini API key", type="password")
        key_button = gr.Button("Connect API Key", variant="primary")

    # ========== Main panel ==========
    with gr.Row(visible=False) as main_panel:
        with gr.Column(scale=1, min_width=180):
            gr.Markdown("### Navigation")
            btn_dashboard = gr.Button("📊 Dashboard")
            btn_simulation = gr.Button("💬 Simulation Agent")
            btn_profile = gr.Button("👤 Profile")
            gr.Markdown("---")
            logout_btn = gr.Button("Log out", variant="secondary")

        with gr.Column(scale=4):
            profile_summary = gr.Markdown("")

            with gr.Column(visible=True) as page_dashboard:
                dashboard_md = gr.Markdown("")
                refresh_btn = gr.Button("🔄 Refresh")

            with gr.Column(visible=False) as page_simulation:
                chatbot = gr.Chatbot(label="Simulation Agent", type="messages")
                chat_input = gr.Textbox(
                    label="Your scenario",
                    placeholder="Describe a scenario (e.g., 'Effect of Diwali fireworks on my asthma')...",
                )
                chat_send = gr.Button("Send", variant="primary")

            with gr.Column(visible=False) as profile_panel:
                gr.Markdown("## 👤 Edit profile")
                pf_name = gr.Textbox(label="Name")
                pf_city = gr.Textbox(label="City")
                with gr.Row():
                    pf_sensitivity = gr.Dropdown(label="Sensitivity", choices=SENSITIVITY_CHOICES)
                    pf_commute = gr.Dropdown(label="Commute", choices=COMMUTE_CHOICES)
                pf_conditions = gr.Dropdown(
                    label="Health conditions",
                    choices=HEALTH_CONDITION_OPTIONS,
                    multiselect=True,
                    allow_custom_value=True,
                )
                pf_new_condition = gr.Textbox(label="Add condition")
                with gr.Row():
                    pf_save = gr.Button("Save", variant="primary")
                    pf_close = gr.Button("Close")

    metrics_footer = gr.Markdown("")

    page_outputs = [
        session_state,
        header,
        notice,
        login_panel,
        onboarding_panel,
        onboarding_progress,
        step1,
        step2,
        step3,
        key_panel,
        main_panel,
        page_dashboard,
        page_simulation,
        profile_panel,
        profile_summary,
        dashboard_md,
        chatbot,
        chat_send,
        pf_name,
        pf_city,
        pf_sensitivity,
        pf_commute,
        pf_conditions,
        metrics_footer,
    ]

    def render(session: UISession):
        """Return updates for every component in ``page_outputs``."""
        s = session.controller.state
        view = s.view
        in_app = view in (AppView.DASHBOARD, AppView.SIMULATION)
        needs_key = in_app and not s.api_key_ready
        # a due fetch starts with the entry action chained after this render
        dashboard_pending = s.dashboard_loading or session.controller.dashboard_fetch_due
        profile = s.profile or UserProfile()
        badge = THEME_BADGES[session.controller.theme_level()]
        step = session.wizard.step
        notice_text = session.notice
        if s.last_error and view is AppView.DASHBOARD and s.dashboard_data is None:
            notice_text = f"{notice_text}\n\n_Last error: {s.last_error}_".strip()
        session.notice = ""
        return (
            session,
            gr.update(value=f"# 🌬️ {APP_TITLE} {badge}".rstrip()),
            gr.update(value=notice_text),
            gr.update(visible=view is AppView.LOGIN),
            gr.update(visible=view is AppView.ONBOARDING),
            gr.update(value=f"Step {step} of {TOTAL_STEPS}"),
            gr.update(visible=step == 1),
            gr.update(visible=step == 2),
            gr.update(visible=step == 3),
            gr.update(visible=needs_key),
            gr.update(visible=in_app),
            gr.update(visible=view is AppView.DASHBOARD and not needs_key and not s.show_profile),
            gr.update(visible=view is AppView.SIMULATION and not needs_key and not s.show_profile),
            gr.update(visible=s.show_profile),
            gr.update(value=render_profile_summary(s.profile)),
            gr.update(value=render_dashboard(s.dashboard_data, dashboard_pending, s.profile)),
            gr.update(value=render_transcript(s.messages)),
            gr.update(interactive=not s.chat_loading),
            gr.update(value=profile.name),
            gr.update(value=profile.city),
            gr.update(value=profile.sensitivity.value),
            gr.update(value=profile.commute_mode.value),
            gr.update(
                value=list(profile.health_conditions),
                choices=sorted(set(HEALTH_CONDITION_OPTIONS) | set(profile.health_conditions)),
            ),
            gr.update(value=render_metrics_footer(get_metrics_summary())),
        )

    # ====== Handlers ======

    def on_load(session):
        return render(_session(session))

    async def on_ensure_dashboard(session):
        session = _session(session)
        controller = session.controller
        while True:
            async for page in track_progress(controller.ensure_dashboard(), lambda: render(session)):
                yield page
            # a result discarded after a city change re-arms the fetch
            if not controller.dashboard_fetch_due:
                break

    def on_login(session):
        session = _session(session)
        session.controller.login()
        return render(session)

    def on_onboarding_next(session, name, city, conditions, custom, sensitivity, commute):
        session = _session(session)
        wizard = session.wizard
        wizard.set_identity(name or "", city or "")
        for condition in HEALTH_CONDITION_OPTIONS:
            if (condition in (conditions or [])) != (condition in wizard.profile.health_conditions):
                wizard.toggle_condition(condition)
        wizard.add_condition(custom or "")
        wizard.set_sensitivity(Sensitivity(sensitivity))
        wizard.set_commute_mode(CommuteMode(commute))

        if not wizard.is_step_valid():
            session.notice = "Please enter your name and city."
            return render(session)
        profile = wizard.next()
        if profile is not None:
            session.controller.complete_onboarding(profile)
            session.wizard = OnboardingWizard()
        return render(session)

    def on_onboarding_back(session):
        session = _session(session)
        session.wizard.back()
        return render(session)

    def on_connect_key(session, api_key):
        session = _session(session)
        if not session.controller.connect_api_key(api_key):
            session.notice = "Please enter a valid API key."
        return render(session)

    def on_select(view):
        def handler(session):
            session = _session(session)
            session.controller.close_profile()
            session.controller.select_view(view)
            return render(session)
        return handler

    async def on_refresh(session):
        session = _session(session)
        async for page in track_progress(session.controller.refresh(), lambda: render(session)):
            yield page

    def on_open_profile(session):
        session = _session(session)
        session.controller.open_profile()
        return render(session)

    def on_close_profile(session):
        session = _session(session)
        session.controller.close_profile()
        return render(session)

    def on_save_profile(session, name, city, sensitivity, commute, conditions, new_condition):
        session = _session(session)
        profile = UserProfile(
            name=(name or "").strip(),
            city=(city or "").strip(),
            sensitivity=Sensitivity(sensitivity),
            commute_mode=CommuteMode(commute),
            health_conditions=list(conditions or []),
        ).with_condition_added(new_condition or "")
        try:
            session.controller.save_profile(profile)
        except AQITrackerError as e:
            session.notice = str(e)
        return render(session)

    def on_logout(session):
        session = _session(session)
        session.controller.logout()
        session.wizard = OnboardingWizard()
        return render(session)

    async def on_chat_send(session, text):
        session = _session(session)
        s = session.controller.state
        if s.chat_loading and (text or "").strip():
            session.notice = (
                "The simulation is still running. Your message was kept; "
                "send it again once the reply arrives."
            )
            yield (*render(session), gr.update())
            return
        async for page in track_progress(session.controller.send_message(text), lambda: render(session)):
            yield (*page, gr.update(value="", interactive=not s.chat_loading))

    # ====== Event bindings ======

    ensure_inputs = dict(fn=on_ensure_dashboard, inputs=[session_state], outputs=page_outputs)

    demo.load(on_load, inputs=[session_state], outputs=page_outputs).then(**ensure_inputs)

    login_button.click(on_login, inputs=[session_state], outputs=page_outputs).then(**ensure_inputs)

    ob_next.click(
        on_onboarding_next,
        inputs=[session_state, ob_name, ob_city, ob_conditions, ob_custom, ob_sensitivity, ob_commute],
        outputs=page_outputs,
    ).then(**ensure_inputs)
    ob_back.click(on_onboarding_back, inputs=[session_state], outputs=page_outputs)

    key_button.click(
        on_connect_key, inputs=[session_state, key_input], outputs=page_outputs
    ).then(**ensure_inputs)

    btn_dashboard.click(
        on_select(AppView.DASHBOARD), inputs=[session_state], outputs=page_outputs
    ).then(**ensure_inputs)
    btn_simulation.click(on_select(AppView.SIMULATION), inputs=[session_state], outputs=page_outputs)
    refresh_btn.click(on_refresh, inputs=[session_state], outputs=page_outputs).then(**ensure_inputs)

    btn_profile.click(on_open_profile, inputs=[session_state], outputs=page_outputs)
    pf_close.click(on_close_profile, inputs=[session_state], outputs=page_outputs)
    pf_save.click(
        on_save_profile,
        inputs=[session_state, pf_name, pf_city, pf_sensitivity, pf_commute, pf_conditions, pf_new_condition],
        outputs=page_outputs,
    ).then(**ensure_inputs)

    logout_btn.click(on_logout, inputs=[session_state], outputs=page_outputs)

    for trigger in (chat_send.click, chat_input.submit):
        trigger(
            on_chat_send,
            inputs=[session_state, chat_input],
            outputs=page_outputs + [chat_input],
        )


def main():
    parser = argparse.ArgumentParser(description=APP_TITLE)
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=7860)
    parser.add_argument("--share", action="store_true")
    args = parser.parse_args()

    logger.info(f"Launching {APP_TITLE} on {args.host}:{args.port}")
    demo.queue().launch(server_name=args.host, server_port=args.port, share=args.share)


if __name__ == "__main__":
    main()
