"""
Streamlit dashboard for the Digital Asset Desk.

Launch with: asset-desk-gui
Or: streamlit run src/asset_desk/gui.py
"""

import sys
from datetime import date
from pathlib import Path

import pandas as pd
import plotly.express as px
import streamlit as st

from asset_desk.app import AssetDeskApp, create_app
from asset_desk.assets import (
    ValidationError,
    cost_by_type,
    search_assets,
)
from asset_desk.config import load_app_config
from asset_desk.formatters import (
    expiration_status,
    format_currency,
    format_date,
    status_label,
    type_label,
)
from asset_desk.models import Asset, AssetInput, AssetStatus, AssetType
from asset_desk.state import NotAuthenticatedError
from asset_desk.storage import PersistenceError


def get_app() -> AssetDeskApp:
    """Application instance kept for the browser session."""
    if "app" not in st.session_state:
        st.session_state["app"] = create_app(load_app_config())
    return st.session_state["app"]


def money(app: AssetDeskApp, amount) -> str:
    return f"{app.config.currency_symbol} {format_currency(amount, app.config.locale)}"


def assets_table(app: AssetDeskApp, assets: list[Asset]) -> pd.DataFrame:
    """Display table with labels instead of wire values."""
    rows = []
    for asset in assets:
        rows.append({
            "Name": asset.name,
            "Type": type_label(asset.type),
            "Status": status_label(asset.status),
            "Cost": money(app, asset.cost),
            "Expires": format_date(asset.expiration_date, app.config.locale),
            "Expiration": expiration_status(asset.expiration_date).label,
            "Tags": ", ".join(asset.tags),
        })
    return pd.DataFrame(rows)


def show_errors(error: ValidationError) -> None:
    for field_name, message in error.errors.items():
        st.error(f"{field_name}: {message}")


def render_sign_in(app: AssetDeskApp) -> None:
    st.title("Digital Asset Desk")
    st.caption("Local data only. Passwords are not verified.")

    with st.form("sign_in_form"):
        email = st.text_input("E-mail")
        password = st.text_input("Password", type="password")
        col1, col2, col3 = st.columns(3)
        sign_in = col1.form_submit_button("Sign in", use_container_width=True)
        sign_up = col2.form_submit_button("Create account", use_container_width=True)
        magic_link = col3.form_submit_button("Email me a link", use_container_width=True)

    if magic_link:
        try:
            app.identity.sign_in_with_magic_link(email)
        except ValidationError as e:
            show_errors(e)

    if app.state.link_sent:
        st.info("Sign-in link requested. No e-mail is sent by the local identity stub; sign in above.")

    if sign_in or sign_up:
        try:
            if sign_up:
                app.identity.sign_up(email, password)
            else:
                app.identity.sign_in(email, password)
            st.rerun()
        except ValidationError as e:
            show_errors(e)
        except PersistenceError as e:
            st.error(f"Could not save the session: {e}")


def render_overview(app: AssetDeskApp) -> None:
    summary = app.overview()
    profile = app.identity.current_session().profile

    st.header(profile.structure_name)

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Online", summary.status_counts[AssetStatus.ONLINE])
    k2.metric("Pending", summary.status_counts[AssetStatus.PENDING])
    k3.metric("Expired", summary.status_counts[AssetStatus.EXPIRED])
    k4.metric("Total cost", money(app, summary.total_cost))

    report = summary.readiness
    if report.is_ready:
        st.success(f"Structure ready ({report.active_count}/{report.total})")
    else:
        st.warning(
            f"Structure incomplete ({report.active_count}/{report.total}). "
            f"Missing: {', '.join(report.missing)}"
        )

    costs = cost_by_type(app.assets.list())
    chart_df = pd.DataFrame(
        {"Type": [type_label(t) for t in costs], "Cost": [float(c) for c in costs.values()]}
    )
    fig = px.bar(chart_df, x="Type", y="Cost", title="Recurring cost by type", template="plotly_dark")
    st.plotly_chart(fig, use_container_width=True)

    if summary.expiring_soon:
        st.subheader(f"Expiring within {app.config.expiring_window_days} days")
        st.dataframe(assets_table(app, summary.expiring_soon), use_container_width=True, hide_index=True)

    if summary.expired:
        st.subheader("Past expiration")
        st.dataframe(assets_table(app, summary.expired), use_container_width=True, hide_index=True)


def render_assets(app: AssetDeskApp) -> None:
    st.header("Assets")

    col1, col2 = st.columns([3, 1])
    term = col1.text_input("Search name or tag")
    type_options = [None] + list(AssetType)
    folder = col2.selectbox(
        "Folder",
        type_options,
        format_func=lambda t: "All" if t is None else type_label(t),
    )

    assets = search_assets(app.assets.list(), term, folder)
    if not assets:
        st.info("No assets found")
        return

    st.dataframe(assets_table(app, assets), use_container_width=True, hide_index=True)

    selected = st.selectbox("Select an asset", assets, format_func=lambda a: f"{a.name} ({a.id[:8]})")
    if selected is not None:
        render_asset_form(app, selected)
        if st.button("Delete asset", type="secondary"):
            try:
                app.assets.delete(selected.id)
                st.rerun()
            except PersistenceError as e:
                st.error(f"Changes may not have been saved: {e}")


def render_asset_form(app: AssetDeskApp, asset: Asset | None = None) -> None:
    """Add form, or edit form when an asset is given."""
    key = f"asset_form_{asset.id if asset else 'new'}"
    with st.form(key):
        name = st.text_input("Name", value=asset.name if asset else "")
        asset_type = st.selectbox(
            "Type",
            list(AssetType),
            index=list(AssetType).index(asset.type) if asset else 0,
            format_func=type_label,
        )
        status = st.selectbox(
            "Status",
            list(AssetStatus),
            index=list(AssetStatus).index(asset.status) if asset else 0,
            format_func=status_label,
        )
        cost = st.number_input(
            "Cost",
            min_value=0.0,
            value=float(asset.cost) if asset else 0.0,
            step=1.0,
            format="%.2f",
        )
        has_expiration = st.checkbox(
            "Expires", value=bool(asset.expiration_date) if asset else False
        )
        expiration = st.date_input(
            "Expiration date",
            value=asset.expiration_date if asset and asset.expiration_date else date.today(),
        )
        tags = st.text_input("Tags (comma separated)", value=", ".join(asset.tags) if asset else "")
        submitted = st.form_submit_button("Save" if asset else "Add asset")

    if not submitted:
        return

    fields = {
        "name": name,
        "type": asset_type,
        "status": status,
        "cost": f"{cost:.2f}",
        "expiration_date": expiration if has_expiration else None,
        "tags": tags,
    }

    try:
        if asset:
            for field_name, value in fields.items():
                setattr(asset, field_name, value)
            app.assets.update(asset)
            st.success("Asset updated")
        else:
            app.assets.create(AssetInput(**fields))
            st.success("Asset added")
    except ValidationError as e:
        show_errors(e)
    except PersistenceError as e:
        st.error(f"Changes may not have been saved: {e}")


def render_settings(app: AssetDeskApp) -> None:
    st.header("Settings")
    profile = app.identity.current_session().profile

    with st.form("profile_form"):
        name = st.text_input("Display name", value=profile.name or "")
        structure_name = st.text_input("Structure name", value=profile.structure_name)
        avatar_url = st.text_input("Avatar URL", value=profile.avatar_url or "")
        submitted = st.form_submit_button("Save profile")

    if submitted:
        try:
            app.identity.update_profile(
                name=name or None,
                structure_name=structure_name,
                avatar_url=avatar_url or None,
            )
            st.success("Profile saved")
        except ValidationError as e:
            show_errors(e)
        except PersistenceError as e:
            st.error(f"Changes may not have been saved: {e}")

    st.divider()
    if st.button("Sign out"):
        try:
            app.identity.sign_out()
            st.rerun()
        except PersistenceError as e:
            st.error(f"Could not sign out, local data was not removed: {e}")


def main_page():
    """Main dashboard page."""
    st.set_page_config(
        page_title="Digital Asset Desk",
        page_icon="🗂️",
        layout="wide",
    )

    app = get_app()
    if app.identity.current_session() is None:
        render_sign_in(app)
        return

    page = st.sidebar.radio("Menu", ["Overview", "Assets", "Add asset", "Settings"])
    st.sidebar.caption(app.identity.current_session().user.email)

    try:
        if page == "Overview":
            render_overview(app)
        elif page == "Assets":
            render_assets(app)
        elif page == "Add asset":
            st.header("Add asset")
            render_asset_form(app)
        else:
            render_settings(app)
    except NotAuthenticatedError:
        st.warning("Your session ended. Please sign in again.")


def main():
    """Entry point for the GUI."""
    # Already inside a streamlit server
    if st.runtime.exists():
        main_page()
    else:
        # Launch streamlit
        import subprocess
        gui_path = Path(__file__).resolve()
        subprocess.run([
            sys.executable, "-m", "streamlit", "run",
            str(gui_path),
            "--server.headless", "true",
        ])


if __name__ == "__main__":
    main_page()
