"""
Dash application factory for StartGrid.

This module creates and configures the main Dash application with:
- Mantine UI components
- A fixed-size draggable grid of link and dynamic cells
- The add-cell dialog
- The /grid HTTP API on the underlying Flask server
- Callback registration

Every page load opens a GridSession on the SessionHost; callbacks find it
through the id kept in ``session-store``.
"""

import logging
from typing import Any, Callable, List, Optional

import dash_mantine_components as dmc
from dash import ALL, Dash, Input, Output, State, ctx, dcc, html, no_update
from dash.exceptions import PreventUpdate
from dash_iconify import DashIconify

from startgrid.api.routes import create_grid_blueprint
from startgrid.components.dashboard import create_grid_board, create_toolbar, edit_toggle_state
from startgrid.components.dashboard.cell import contrast_class
from startgrid.components.modals import create_add_cell_modal, create_icon_results
from startgrid.config import Config
from startgrid.db.repository import GridRepository
from startgrid.errors import ValidationError
from startgrid.host import SessionExpired, SessionHost
from startgrid.icons.catalog import IconCatalog
from startgrid.session.grid_session import GridSession
from startgrid.session.state import Notice, SaveStatus

logger = logging.getLogger(__name__)


POLL_INTERVAL_MS = 400

NOTICE_COLORS = {
    "info": ("blue", "tabler:info-circle"),
    "success": ("green", "tabler:check"),
    "error": ("red", "tabler:alert-circle"),
}


def create_app(config: Config, host: Optional[SessionHost] = None) -> Dash:
    """
    Create and configure the Dash application.
    """
    app = Dash(
        __name__,
        suppress_callback_exceptions=True,
        title="StartGrid",
        update_title=None,
    )

    grid_repo = GridRepository(config.db_path, config.default_col, config.default_row)
    catalog = IconCatalog.load(config.icon_catalog_path)

    if host is None:
        host = SessionHost(config, grid_repo)
    host.start()

    # Store references for callbacks (use Flask server config, not Dash config)
    app.server.config["app_config"] = config
    app.server.config["grid_repo"] = grid_repo
    app.server.config["session_host"] = host

    app.server.register_blueprint(
        create_grid_blueprint(grid_repo, catalog, lambda: config.account_id)
    )

    def serve_layout():
        session_id = host.open_session()
        board = host.with_session(session_id, render_board)
        return create_layout(config, session_id, board)

    app.layout = serve_layout

    register_callbacks(app, host, config)

    return app


def create_layout(config: Config, session_id: str, board) -> dmc.MantineProvider:
    """Create the main application layout."""
    return dmc.MantineProvider(
        id="mantine-provider",
        theme={
            "fontFamily": "Inter, -apple-system, BlinkMacSystemFont, sans-serif",
            "primaryColor": "blue",
            "components": {
                "Button": {"defaultProps": {"radius": "md"}},
                "Paper": {"defaultProps": {"radius": "md"}},
                "TextInput": {"defaultProps": {"radius": "md"}},
            },
        },
        children=[
            # Notification system
            dmc.NotificationProvider(position="top-right"),
            html.Div(id="notifications-container"),

            # Session state
            dcc.Store(id="session-store", storage_type="memory", data=session_id),
            dcc.Store(id="search-version-store", storage_type="memory", data=0),
            dcc.Store(id="layout-sync-store", storage_type="memory"),
            dcc.Interval(id="session-poll", interval=POLL_INTERVAL_MS),

            # Modals
            create_add_cell_modal(config.gallery, config.default_color),

            # Main layout
            dmc.AppShell(
                id="app-shell",
                children=[
                    dmc.AppShellHeader(create_header()),
                    dmc.AppShellMain(
                        children=[
                            create_toolbar(editing=False),
                            html.Div(board, id="grid-wrapper"),
                        ],
                        id="main-content",
                    ),
                ],
                header={"height": 60},
                padding="md",
            ),
        ],
    )


def create_header():
    """Create the header content."""
    return dmc.Group(
        [
            dmc.Group([
                DashIconify(icon="tabler:layout-grid", width=24, color="var(--mantine-color-blue-6)"),
                dmc.Title("StartGrid", order=3, c="blue"),
            ], gap="xs"),
        ],
        justify="space-between", h="100%", px="md",
    )


def create_notification(title: str, message: str, color: str = "blue", icon: str = "tabler:check") -> dmc.Notification:
    """Create a notification component."""
    return dmc.Notification(
        title=title,
        message=message,
        color=color,
        icon=DashIconify(icon=icon),
        action="show",
        autoClose=4000,
    )


def notice_to_notification(notice: Notice) -> dmc.Notification:
    color, icon = NOTICE_COLORS.get(notice.level, NOTICE_COLORS["info"])
    return create_notification(notice.title, notice.message, color=color, icon=icon)


# =============================================================================
# SESSION RENDERING
# These run on the session loop via SessionHost.with_session.
# =============================================================================

def render_board(session: GridSession):
    return create_grid_board(session.engine, session.editing)


def render_grid(session: GridSession) -> tuple:
    """Board plus the toggle button label, icon and variant."""
    label, icon, variant = edit_toggle_state(session.editing)
    return render_board(session), label, icon, variant


def render_link_preview(session: GridSession) -> tuple:
    """Preview style, preview image src and class, picker value, suggestion swatch."""
    builder = session.link_builder
    style = {
        "backgroundColor": builder.preview_color,
        "width": 80,
        "height": 80,
        "borderRadius": "8px",
        "display": "flex",
        "alignItems": "center",
        "justifyContent": "center",
    }
    return (
        style,
        builder.preview_image,
        "white" if builder.preview_light else None,
        session.colors.current,
        session.colors.swatch,
    )


def grid_outputs() -> List[Output]:
    return [
        Output("grid-wrapper", "children", allow_duplicate=True),
        Output("edit-toggle-btn", "children", allow_duplicate=True),
        Output("edit-toggle-btn", "leftSection", allow_duplicate=True),
        Output("edit-toggle-btn", "variant", allow_duplicate=True),
    ]


def link_preview_outputs() -> List[Output]:
    return [
        Output("add-link-preview", "style", allow_duplicate=True),
        Output("add-link-preview-img", "src", allow_duplicate=True),
        Output("add-link-preview-img", "className", allow_duplicate=True),
        Output("add-color-picker", "value", allow_duplicate=True),
        Output("add-suggested-color", "color", allow_duplicate=True),
    ]


# =============================================================================
# CALLBACKS
# =============================================================================

def register_callbacks(app: Dash, host: SessionHost, config: Config):
    """Register all Dash callbacks."""

    def run(session_id: Optional[str], fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return host.with_session(session_id, fn, *args)
        except SessionExpired:
            logger.info("Callback for expired session %s ignored", session_id)
            raise PreventUpdate

    # -------------------------------------------------------------------------
    # Edit mode
    # -------------------------------------------------------------------------
    @app.callback(
        *grid_outputs(),
        Input("edit-toggle-btn", "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def toggle_edit(n_clicks, session_id):
        if not n_clicks:
            raise PreventUpdate

        def toggle(session: GridSession):
            session.toggle()
            return render_grid(session)

        return run(session_id, toggle)

    @app.callback(
        Output("layout-sync-store", "data"),
        Input("start-grid", "layout"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def sync_layout(layout, session_id):
        """Copy geometry the user dragged in the browser back onto the engine."""
        if not layout:
            raise PreventUpdate

        def apply(session: GridSession):
            if not session.editing:
                return False
            return session.engine.apply_layout(layout)

        if not run(session_id, apply):
            raise PreventUpdate
        return len(layout)

    @app.callback(
        *grid_outputs(),
        Input({"type": "cell-remove-btn", "index": ALL}, "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def remove_cell(n_clicks, session_id):
        if not any(n_clicks):
            raise PreventUpdate

        triggered = ctx.triggered_id
        if not triggered:
            raise PreventUpdate

        def remove(session: GridSession):
            if not session.remove_cell(triggered["index"]):
                raise PreventUpdate
            return render_grid(session)

        return run(session_id, remove)

    @app.callback(
        Output("retry-save-btn", "style", allow_duplicate=True),
        Input("retry-save-btn", "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def retry_save(n_clicks, session_id):
        if not n_clicks:
            raise PreventUpdate
        run(session_id, lambda session: session.retry_save())
        return {"display": "none"}

    # -------------------------------------------------------------------------
    # Polling: icon results, notices, save status
    # -------------------------------------------------------------------------
    @app.callback(
        Output("add-brand-icons", "children"),
        Output("add-generic-icons", "children"),
        Output("search-version-store", "data"),
        Output("notifications-container", "children"),
        Output("retry-save-btn", "style"),
        Input("session-poll", "n_intervals"),
        State("session-store", "data"),
        State("search-version-store", "data"),
    )
    def poll_session(n_intervals, session_id, seen_version):
        def collect(session: GridSession):
            search = session.icon_search
            notices = session.state.drain_notices()
            failed = session.save_status is SaveStatus.FAILED

            if search.version == seen_version:
                brands = generics = version = no_update
            else:
                brands = create_icon_results(search.results.brands)
                generics = create_icon_results(search.results.generics)
                version = search.version

            notifications = [notice_to_notification(n) for n in notices] if notices else no_update
            retry_style = {"display": "inline-flex"} if failed else {"display": "none"}
            return brands, generics, version, notifications, retry_style

        return run(session_id, collect)

    # -------------------------------------------------------------------------
    # Add dialog
    # -------------------------------------------------------------------------
    @app.callback(
        Output("add-cell-modal", "opened", allow_duplicate=True),
        Input("add-cell-btn", "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def open_add_dialog(n_clicks, session_id):
        if not n_clicks:
            raise PreventUpdate
        run(session_id, lambda session: session.open_add_dialog())
        return True

    @app.callback(
        Output("add-cell-modal", "className"),
        Input("add-cell-modal", "opened"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def sync_dialog(opened, session_id):
        if opened:
            raise PreventUpdate
        run(session_id, lambda session: session.close_add_dialog())
        return no_update

    @app.callback(
        Output("add-cell-tabs", "className"),
        Input("add-cell-tabs", "value"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def select_tab(tab, session_id):
        if not tab:
            raise PreventUpdate
        run(session_id, lambda session: session.select_tab(tab))
        return no_update

    # -------------------------------------------------------------------------
    # Link tab
    # -------------------------------------------------------------------------
    @app.callback(
        Output("add-icon-search", "error"),
        Input("add-icon-search", "value"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def search_icons(value, session_id):
        """Debounced on the session loop; results arrive through the poll."""
        text = value or ""

        def on_input(session: GridSession):
            if text == session.icon_search.query:
                raise PreventUpdate
            session.icon_search.on_input(text)

        run(session_id, on_input)
        return None

    @app.callback(
        *link_preview_outputs(),
        Input({"type": "icon-result", "index": ALL}, "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def select_icon(n_clicks, session_id):
        if not any(n_clicks):
            raise PreventUpdate

        triggered = ctx.triggered_id
        if not triggered:
            raise PreventUpdate

        def select(session: GridSession):
            icon = session.icon_search.find(triggered["index"])
            if icon is None:
                raise PreventUpdate
            session.link_builder.select_icon(icon)
            return render_link_preview(session)

        return run(session_id, select)

    @app.callback(
        *link_preview_outputs(),
        Input("add-color-picker", "value"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def change_color(value, session_id):
        if not value:
            raise PreventUpdate

        def change(session: GridSession):
            if value.lower() == session.colors.current:
                raise PreventUpdate
            try:
                session.picker.user_changed(value)
            except ValueError:
                raise PreventUpdate
            return render_link_preview(session)

        return run(session_id, change)

    @app.callback(
        *link_preview_outputs(),
        Input("add-suggested-color", "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def apply_suggestion(n_clicks, session_id):
        if not n_clicks:
            raise PreventUpdate

        def apply(session: GridSession):
            session.link_builder.apply_suggestion()
            return render_link_preview(session)

        return run(session_id, apply)

    @app.callback(
        Output("add-link-input", "error"),
        Input("add-link-input", "value"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def validate_link(value, session_id):
        valid = run(session_id, lambda session: session.link_builder.set_url(value or ""))
        return None if valid else "Not a valid link"

    @app.callback(
        Output("add-cell-modal", "opened", allow_duplicate=True),
        *grid_outputs(),
        *link_preview_outputs(),
        Output("add-icon-search", "value"),
        Output("add-link-input", "value"),
        Output("add-link-input", "error", allow_duplicate=True),
        Output("add-brand-icons", "children", allow_duplicate=True),
        Output("add-generic-icons", "children", allow_duplicate=True),
        Output("notifications-container", "children", allow_duplicate=True),
        Input("add-link-finish", "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def finish_link(n_clicks, session_id):
        if not n_clicks:
            raise PreventUpdate

        def finish(session: GridSession):
            try:
                session.link_builder.finish()
            except ValidationError as e:
                error = str(e) if e.field == "link" else no_update
                notification = create_notification(
                    "Cell not added", str(e), color="red", icon="tabler:alert-circle",
                )
                return (no_update,) * 12 + (error, no_update, no_update, notification)

            return (
                False,
                *render_grid(session),
                *render_link_preview(session),
                "",
                "",
                None,
                [],
                [],
                no_update,
            )

        return run(session_id, finish)

    # -------------------------------------------------------------------------
    # Dynamic tab
    # -------------------------------------------------------------------------
    @app.callback(
        Output("add-iframe-src", "value", allow_duplicate=True),
        Output("add-dynamic-preview", "src", allow_duplicate=True),
        Output("add-dynamic-error", "children", allow_duplicate=True),
        Input({"type": "gallery-item", "index": ALL}, "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def select_gallery(n_clicks, session_id):
        if not any(n_clicks):
            raise PreventUpdate

        triggered = ctx.triggered_id
        if not triggered:
            raise PreventUpdate

        index = triggered["index"]
        if not 0 <= index < len(config.gallery):
            raise PreventUpdate
        src = config.gallery[index].src

        run(session_id, lambda session: session.dynamic_builder.select_gallery(src))
        return "", src, ""

    @app.callback(
        Output("add-dynamic-preview", "src", allow_duplicate=True),
        Output("add-dynamic-error", "children", allow_duplicate=True),
        Input("add-iframe-src", "value"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def set_custom_src(value, session_id):
        text = (value or "").strip()

        def set_custom(session: GridSession):
            builder = session.dynamic_builder
            if text == builder.custom_src:
                raise PreventUpdate
            builder.set_custom(text)
            return builder.src

        return run(session_id, set_custom), ""

    @app.callback(
        Output("add-cell-modal", "opened", allow_duplicate=True),
        *grid_outputs(),
        Output("add-iframe-src", "value", allow_duplicate=True),
        Output("add-dynamic-preview", "src", allow_duplicate=True),
        Output("add-dynamic-error", "children", allow_duplicate=True),
        Input("add-dynamic-finish", "n_clicks"),
        State("session-store", "data"),
        prevent_initial_call=True,
    )
    def finish_dynamic(n_clicks, session_id):
        if not n_clicks:
            raise PreventUpdate

        def finish(session: GridSession):
            try:
                session.dynamic_builder.finish()
            except ValidationError as e:
                return (no_update,) * 7 + (str(e),)
            return (False, *render_grid(session), "", "", "")

        return run(session_id, finish)
