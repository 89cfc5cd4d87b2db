from lmi_providers.di import build_container
from lmi_providers.mock import MockInvoker
from lmi_providers.openai_compat import OpenAICompatibleInvoker


def test_container_caches_registry_and_invoker():
    c = build_container({"use_mocks": True})
    assert c.registry() is c.registry()  # nosec B101
    inv = c.invoker()
    assert isinstance(inv, MockInvoker) and c.invoker() is inv  # nosec B101
    assert "openai" in inv.list_providers()  # nosec B101


def test_container_honours_catalog_override(tmp_path):
    catalog = tmp_path / "c.json"
    catalog.write_text('{"providers": {"solo": {"name": "Solo"}}}', encoding="utf-8")
    c = build_container({"catalog_path": str(catalog)})
    assert c.registry().ids() == ["lmi_solo"]  # nosec B101
    assert isinstance(c.invoker(), OpenAICompatibleInvoker)  # nosec B101
    c.clear()
    assert c.registry() is not None  # nosec B101
