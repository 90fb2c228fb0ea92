import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from kubepreview.core.engine import PreviewSession, default_title
from kubepreview.core.models import ColorScheme, Labels

DEPLOYMENT = {
    "apiVersion": "apps/v1",
    "kind": "Deployment",
    "metadata": {
        "name": "web",
        "managedFields": [{"manager": "kubectl-client-side-apply", "operation": "Update"}],
    },
    "spec": {"replicas": 3},
}


def test_closed_session_does_no_work():
    session = PreviewSession(DEPLOYMENT)

    assert session.is_open is False
    assert session.content() is None
    assert session.view() is None
    assert session.pipeline.computations == 0


def test_defaults():
    session = PreviewSession(DEPLOYMENT)
    session.open()
    view = session.view()

    assert session.hide_managed_fields is True
    assert view.dialog.is_open is True
    assert view.dialog.title == "Dry Run Preview: Deployment/web"
    assert view.dialog.full_screen_capable is True
    assert view.toggle.checked is True
    assert view.toggle.label == "Hide managed fields"
    assert view.display.syntax_mode == "yaml"
    assert view.display.read_only is True
    assert view.display.color_scheme is ColorScheme.DARK
    assert view.close_label == "Close"
    assert "managedFields" not in view.display.content


def test_toggle_flips_content_and_back():
    session = PreviewSession(DEPLOYMENT, title="Preview")
    session.open()
    hidden = session.content().text

    assert session.toggle_managed_fields() is False
    shown = session.content().text
    assert "kubectl-client-side-apply" in shown

    assert session.toggle_managed_fields() is True
    assert session.content().text == hidden


def test_repeated_reads_are_memoized():
    session = PreviewSession(DEPLOYMENT)
    session.open()
    session.content()
    session.view()
    session.content()
    assert session.pipeline.computations == 1


def test_new_item_recomputes():
    session = PreviewSession(DEPLOYMENT)
    session.open()
    session.content()

    session.set_item({"kind": "Service", "metadata": {"name": "svc"}})
    text = session.content().text

    assert "kind: Service" in text
    assert session.pipeline.computations == 2


def test_close_notifies_host_once():
    calls = []
    session = PreviewSession(DEPLOYMENT, on_close=lambda: calls.append("closed"))
    session.open()

    session.close()
    session.close()

    assert calls == ["closed"]
    assert session.content() is None


def test_flag_persists_across_openings():
    session = PreviewSession(DEPLOYMENT)
    session.open()
    session.toggle_managed_fields()
    session.close()

    session.open()
    assert session.hide_managed_fields is False
    assert "managedFields" in session.content().text


def test_open_with_new_item():
    session = PreviewSession(DEPLOYMENT)
    session.open({"kind": "ConfigMap", "data": {"k": "v"}})
    assert "kind: ConfigMap" in session.content().text


def test_injected_labels_and_scheme():
    labels = Labels(hide_managed_fields="Verwaltete Felder ausblenden", close="Schließen")
    session = PreviewSession(DEPLOYMENT, labels=labels, color_scheme="light")
    session.open()
    view = session.view()

    assert view.toggle.label == "Verwaltete Felder ausblenden"
    assert view.close_label == "Schließen"
    assert view.display.color_scheme is ColorScheme.LIGHT


def test_unrenderable_item_surfaces_placeholder():
    item = {"metadata": {"name": "bad"}, "spec": {"callback": print}}
    session = PreviewSession(item)
    session.open()
    view = session.view()

    assert view.render_ok is False
    assert view.display.content.startswith("# Unable to render preview:")


def test_default_title_variants():
    assert default_title({"kind": "Pod", "metadata": {"name": "a"}}) == "Dry Run Preview: Pod/a"
    assert default_title({"kind": "Pod"}) == "Dry Run Preview: Pod"
    assert default_title(None) == "Dry Run Preview: Resource"


def test_derived_title_follows_new_item():
    session = PreviewSession(DEPLOYMENT)
    session.open({"kind": "Service", "metadata": {"name": "svc"}})
    assert session.title == "Dry Run Preview: Service/svc"
    assert session.view().dialog.title == "Dry Run Preview: Service/svc"

    session.set_item({"kind": "ConfigMap", "metadata": {"name": "cfg"}})
    assert session.title == "Dry Run Preview: ConfigMap/cfg"


def test_explicit_title_is_kept_on_new_item():
    session = PreviewSession(DEPLOYMENT, title="Apply preview")
    session.set_item({"kind": "Service", "metadata": {"name": "svc"}})
    assert session.title == "Apply preview"


def test_open_with_none_item_renders_null():
    session = PreviewSession(DEPLOYMENT)
    session.open(None)

    assert session.item is None
    assert session.content().text.splitlines()[0] == "null"


def test_open_without_argument_keeps_item():
    session = PreviewSession(DEPLOYMENT)
    session.open()
    assert session.item is DEPLOYMENT
