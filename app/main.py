"""
Streamlit Frontend for Net Worth Tracker

This is the user interface for recording accounts, taking snapshots and
reviewing the trend.

DESIGN PRINCIPLES:
1. The UI only reads derived values and calls store actions
2. Every form is validated before an action runs
3. Saving happens in the background; the UI never waits on storage
4. Destructive actions ask for confirmation

The store's save writer runs on its own event loop in a background
thread, so saves keep flowing between Streamlit reruns.
"""

import asyncio
import threading
from typing import Optional

import streamlit as st

from networth_tracker.audit import configure_logging, get_audit_logger
from networth_tracker.config import get_settings
from networth_tracker.derivations import (
    all_time_change,
    category_breakdown,
    change_since_previous,
    partition_by_type,
    trend_series,
)
from networth_tracker.formatting import (
    format_currency,
    format_short_date,
    format_signed_change,
    trend_chart_rows,
)
from networth_tracker.models import AccountType
from networth_tracker.store import NetWorthStore, create_store
from networth_tracker.validation import AccountForm, AccountFormValidator


# Page configuration
st.set_page_config(
    page_title="Net Worth Tracker",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)


class BackgroundLoop:
    """An asyncio event loop running forever on a daemon thread."""

    def __init__(self):
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self.loop.run_forever,
            name="networth-store-loop",
            daemon=True,
        )
        self._thread.start()

    def run(self, coro):
        """Run a coroutine on the loop and wait for its result."""
        return asyncio.run_coroutine_threadsafe(coro, self.loop).result()


@st.cache_resource
def get_store() -> NetWorthStore:
    """Create, load and cache the single store for this process."""
    settings = get_settings().app
    configure_logging(settings.log_level, settings.debug_mode)

    runtime = BackgroundLoop()
    store = create_store()
    runtime.run(store.load())
    return store


def money(value) -> str:
    return format_currency(value, get_settings().app.currency_symbol)


def signed(value) -> str:
    return format_signed_change(value, get_settings().app.currency_symbol)


# =============================================================================
# PAGES
# =============================================================================

def render_dashboard(store: NetWorthStore) -> None:
    settings = get_settings().app
    st.title("📈 Net Worth")

    totals = store.totals
    col1, col2, col3 = st.columns(3)
    col1.metric("Net worth", money(totals.net_worth))
    col2.metric("Total assets", money(totals.total_assets))
    col3.metric("Total liabilities", money(totals.total_liabilities))

    if st.button("📸 Take snapshot", type="primary"):
        snapshot = store.take_snapshot()
        st.success(f"Snapshot recorded: {money(snapshot.net_worth)}")

    snapshots = store.snapshots
    points = trend_series(snapshots, settings.dashboard_chart_points)
    if len(points) >= 2:
        st.subheader("History")
        st.line_chart(
            trend_chart_rows(points),
            x="date",
            y="Net worth",
        )
    else:
        st.info("Take 2 or more snapshots to see your net worth history chart here.")

    if snapshots:
        label = f"{len(snapshots)} snapshot{'s' if len(snapshots) != 1 else ''} recorded"
        change = all_time_change(snapshots, settings.all_time_window)
        if change is not None:
            label += f" · {signed(change)} all time"
        st.caption(label)


def render_accounts(store: NetWorthStore) -> None:
    st.title("🏦 Accounts")
    st.caption(f"Net worth: {money(store.net_worth)}")

    if not store.accounts:
        st.info("No accounts yet. Add your first asset or liability.")
        return

    groups = partition_by_type(store.accounts)
    sections = [
        ("Assets", groups[AccountType.ASSET], store.total_assets),
        ("Liabilities", groups[AccountType.LIABILITY], store.total_liabilities),
    ]
    for title, accounts, total in sections:
        if not accounts:
            continue
        st.subheader(f"{title} · {money(total)}")
        for account in accounts:
            col_name, col_value, col_edit, col_delete = st.columns([4, 2, 1, 1])
            col_name.markdown(f"**{account.name}**  \n{account.category or 'Uncategorized'}")
            col_value.markdown(money(account.signed_value))
            col_edit.button(
                "Edit",
                key=f"edit-{account.id}",
                on_click=_start_editing,
                args=(account.id, account.type, account.category),
            )
            if col_delete.button("Delete", key=f"delete-{account.id}"):
                st.session_state.confirm_delete_account = account.id

    pending = st.session_state.get("confirm_delete_account")
    target = store.get_account(pending) if pending else None
    if target is not None:
        st.warning(f'Delete "{target.name}"? This cannot be undone.')
        yes, no = st.columns(2)
        if yes.button("Delete account", type="primary"):
            store.delete_account(target.id)
            st.session_state.confirm_delete_account = None
            st.rerun()
        if no.button("Cancel"):
            st.session_state.confirm_delete_account = None
            st.rerun()


def _reset_category() -> None:
    form = AccountForm(type=st.session_state.form_type_previous)
    st.session_state.form_category = form.with_type(st.session_state.form_type).category
    st.session_state.form_type_previous = st.session_state.form_type


def render_account_form(store: NetWorthStore) -> None:
    editing_id: Optional[str] = st.session_state.get("editing_account_id")
    editing = store.get_account(editing_id) if editing_id else None
    initial = AccountForm.from_account(editing) if editing else AccountForm()

    st.title("✏️ Edit Account" if editing else "➕ Add Account")

    st.session_state.setdefault("form_type", initial.type)
    st.session_state.setdefault("form_type_previous", st.session_state.form_type)
    st.session_state.setdefault("form_category", initial.category)

    st.radio(
        "Type",
        list(AccountType),
        format_func=lambda t: t.value.title(),
        key="form_type",
        horizontal=True,
        on_change=_reset_category,
    )
    form_type = st.session_state.form_type
    categories = list(AccountForm(type=form_type).categories)

    with st.form("account_form"):
        name = st.text_input("Name", value=initial.name, placeholder="e.g. Chase Savings")
        value = st.text_input("Value", value=initial.value, placeholder="0.00")
        current = st.session_state.form_category
        category = st.selectbox(
            "Category",
            categories,
            index=categories.index(current) if current in categories else None,
            placeholder="Select a category",
        )
        submitted = st.form_submit_button("Save", type="primary")

    if editing:
        st.button("Cancel editing", on_click=_clear_form_state)

    if not submitted:
        return

    form = AccountForm(
        name=name,
        type=form_type,
        category=category,
        value=value,
        account_id=editing.id if editing else None,
    )
    validator = AccountFormValidator()
    result = validator.validate(form)
    if result.has_errors:
        for issue in result.issues:
            st.error(issue.message)
        return

    if editing:
        store.update_account(validator.apply_to(form, editing))
        st.success("Account updated")
    else:
        account = store.add_account(validator.to_draft(form))
        st.success(f"Added {account.name}")
    _clear_form_state()


FORM_STATE_KEYS = ("editing_account_id", "form_type", "form_type_previous", "form_category")


def _clear_form_state() -> None:
    for key in FORM_STATE_KEYS:
        st.session_state.pop(key, None)


def _start_editing(account_id: str, account_type: AccountType, category: Optional[str]) -> None:
    # Runs as a callback, before any widget of the next run exists
    _clear_form_state()
    st.session_state.editing_account_id = account_id
    st.session_state.form_type = account_type
    st.session_state.form_type_previous = account_type
    st.session_state.form_category = category
    st.session_state.page = "Add / Edit Account"


def render_history(store: NetWorthStore) -> None:
    st.title("🕒 History")
    snapshots = store.snapshots

    if not snapshots:
        st.info("No snapshots yet. Take one from the dashboard.")
        return

    st.caption(f"{len(snapshots)} snapshot{'s' if len(snapshots) != 1 else ''}")
    for index, snapshot in enumerate(snapshots):
        with st.container(border=True):
            left, mid, right = st.columns([3, 3, 1])
            left.markdown(f"**{snapshot.date:%A, %B %d, %Y}**  \n{snapshot.date:%H:%M}")
            mid.markdown(
                f"**{money(snapshot.net_worth)}**  \n"
                f"+{money(snapshot.total_assets)} / -{money(snapshot.total_liabilities)}"
            )
            change = change_since_previous(snapshots, index)
            if change is not None:
                arrow = "▲" if change.is_gain else "▼"
                mid.caption(f"{arrow} {money(abs(change.change))} since previous")
            if right.button("Delete", key=f"delete-snapshot-{snapshot.id}"):
                store.delete_snapshot(snapshot.id)
                st.rerun()


def render_charts(store: NetWorthStore) -> None:
    settings = get_settings().app
    st.title("📊 Charts")

    points = trend_series(store.snapshots, settings.history_chart_points)
    st.subheader("Net worth over time")
    if len(points) >= 2:
        st.caption(
            f"{len(points)} snapshots · {format_short_date(points[0].date)} – "
            f"{format_short_date(points[-1].date)}"
        )
        st.line_chart(
            trend_chart_rows(points),
            x="date",
            y="Net worth",
        )
    else:
        st.info("Take at least 2 snapshots from the Dashboard to see your history chart.")

    for title, account_type, total in (
        ("Assets by category", AccountType.ASSET, store.total_assets),
        ("Liabilities by category", AccountType.LIABILITY, store.total_liabilities),
    ):
        st.subheader(title)
        shares = category_breakdown(store.accounts, account_type)
        if not shares:
            st.info(f"No {account_type.value} accounts yet.")
            continue
        st.caption(
            f"{len(shares)} {'category' if len(shares) == 1 else 'categories'} · total {money(total)}"
        )
        st.bar_chart(
            [{"category": s.category, "value": float(s.total)} for s in shares],
            x="category",
            y="value",
        )
        for share in shares:
            st.markdown(f"- {share.category}: {money(share.total)} ({share.percent:.1f}%)")


def render_activity() -> None:
    st.title("📝 Activity")
    events = get_audit_logger().recent_events()
    if not events:
        st.info("No activity recorded in this session.")
        return
    for event in events:
        st.markdown(
            f"`{event.timestamp:%H:%M:%S}` **{event.event_type.value}** {event.description}"
        )


PAGES = ["Dashboard", "Accounts", "Add / Edit Account", "History", "Charts", "Activity"]


def main():
    """Main application entry point."""
    store = get_store()

    st.sidebar.title("📈 Net Worth Tracker")
    st.sidebar.markdown("---")
    page = st.sidebar.radio(
        "Navigate to:",
        PAGES,
        key="page",
    )

    if store.is_loading:
        st.info("Loading your data…")
        return

    if page == "Dashboard":
        render_dashboard(store)
    elif page == "Accounts":
        render_accounts(store)
    elif page == "Add / Edit Account":
        render_account_form(store)
    elif page == "History":
        render_history(store)
    elif page == "Charts":
        render_charts(store)
    else:
        render_activity()


if __name__ == "__main__":
    main()
