"""End-to-end tests for the click commands against an in-memory REST service."""

import json

import httpx
import pytest
from click.testing import CliRunner

from prodform.infrastructure import bootstrap
from prodform.infrastructure.cli.main import cli


class InMemoryProductService:
    """Answers the /produtos REST contract from a dict."""

    def __init__(self) -> None:
        self.products: dict[int, dict] = {}
        self.next_id = 1
        self.down = False
        self.list_down = False

    def add(self, nome, preco, descricao):
        product = {"id": self.next_id, "nome": nome, "preco": preco, "descricao": descricao}
        self.products[self.next_id] = product
        self.next_id += 1
        return product

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.down:
            return httpx.Response(503)
        parts = request.url.path.strip("/").split("/")
        if parts == ["produtos"]:
            if request.method == "GET":
                if self.list_down:
                    return httpx.Response(503)
                return httpx.Response(200, json=list(self.products.values()))
            if request.method == "POST":
                body = json.loads(request.content)
                return httpx.Response(201, json=self.add(**body))
        if len(parts) == 2 and parts[0] == "produtos":
            product = self.products.get(int(parts[1])) if parts[1].isdigit() else None
            if product is None:
                return httpx.Response(404)
            if request.method == "GET":
                return httpx.Response(200, json=product)
            if request.method == "PATCH":
                product.update(json.loads(request.content))
                return httpx.Response(200, json=product)
            if request.method == "DELETE":
                del self.products[product["id"]]
                return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture()
def service(monkeypatch):
    service = InMemoryProductService()
    service.add("Widget", 15.0, "A widget")

    def http_client(settings):
        return httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=httpx.MockTransport(service),
        )

    monkeypatch.setattr(bootstrap, "http_client", http_client)
    return service


@pytest.fixture()
def runner():
    return CliRunner()


class TestProductCommands:

    def test_list(self, runner, service):
        result = runner.invoke(cli, ["product", "list"])

        assert result.exit_code == 0, result.output
        assert "Widget" in result.output
        assert "15.00" in result.output

    def test_list_empty(self, runner, service):
        service.products.clear()

        result = runner.invoke(cli, ["product", "list"])

        assert result.exit_code == 0
        assert "No products found." in result.output

    def test_add(self, runner, service):
        result = runner.invoke(
            cli,
            ["product", "add", "--name", "Gadget", "--price", "9.99", "--description", "A gadget"],
        )

        assert result.exit_code == 0, result.output
        assert "Product #2 'Gadget' added at 9.99" in result.output
        assert service.products[2] == {
            "id": 2,
            "nome": "Gadget",
            "preco": 9.99,
            "descricao": "A gadget",
        }

    def test_add_negative_price_rejected(self, runner, service):
        result = runner.invoke(
            cli,
            ["product", "add", "--name", "Gadget", "--price", "-1", "--description", "A gadget"],
        )

        assert result.exit_code != 0
        assert "Invalid price" in result.output
        assert len(service.products) == 1

    def test_show(self, runner, service):
        result = runner.invoke(cli, ["product", "show", "1"])

        assert result.exit_code == 0, result.output
        assert "Product #1" in result.output
        assert "A widget" in result.output

    def test_show_missing(self, runner, service):
        result = runner.invoke(cli, ["product", "show", "42"])

        assert result.exit_code != 0
        assert "not found" in result.output

    def test_update_keeps_unspecified_fields(self, runner, service):
        result = runner.invoke(cli, ["product", "update", "--id", "1", "--price", "19.50"])

        assert result.exit_code == 0, result.output
        assert service.products[1] == {
            "id": 1,
            "nome": "Widget",
            "preco": 19.5,
            "descricao": "A widget",
        }

    def test_update_without_changes_is_usage_error(self, runner, service):
        result = runner.invoke(cli, ["product", "update", "--id", "1"])

        assert result.exit_code == 2
        assert "Nothing to update" in result.output

    def test_update_missing(self, runner, service):
        result = runner.invoke(cli, ["product", "update", "--id", "42", "--name", "X"])

        assert result.exit_code != 0
        assert "not found" in result.output

    def test_delete(self, runner, service):
        result = runner.invoke(cli, ["product", "delete", "--id", "1"])

        assert result.exit_code == 0, result.output
        assert "Product #1 deleted" in result.output
        assert service.products == {}

    def test_service_unavailable(self, runner, service):
        service.down = True

        result = runner.invoke(cli, ["product", "list"])

        assert result.exit_code != 0
        assert "Failed to load products" in result.output

    def test_add_succeeds_when_only_refresh_fails(self, runner, service):
        service.list_down = True

        result = runner.invoke(
            cli,
            ["product", "add", "--name", "Gadget", "--price", "9.99", "--description", "A gadget"],
        )

        assert result.exit_code == 0, result.output
        assert "Product #2 'Gadget' added at 9.99" in result.output
        assert "Warning: Failed to load products" in result.output
        assert len(service.products) == 2

    def test_delete_succeeds_when_only_refresh_fails(self, runner, service):
        service.list_down = True

        result = runner.invoke(cli, ["product", "delete", "--id", "1"])

        assert result.exit_code == 0, result.output
        assert "Warning: Failed to load products" in result.output
        assert service.products == {}

    def test_base_url_must_be_http(self, runner, service):
        result = runner.invoke(cli, ["--base-url", "ftp://catalog", "product", "list"])

        assert result.exit_code == 2
        assert "http(s)" in result.output

    def test_base_url_from_environment(self, runner, service, monkeypatch):
        seen = []
        original = bootstrap.http_client

        def recording(settings):
            seen.append(settings)
            return original(settings)

        monkeypatch.setattr(bootstrap, "http_client", recording)

        result = runner.invoke(
            cli, ["product", "list"], env={"PRODFORM_API_URL": "http://catalog.test:8080"}
        )

        assert result.exit_code == 0, result.output
        assert seen[0].base_url == "http://catalog.test:8080"


class TestSession:

    def test_create_then_quit(self, runner, service):
        result = runner.invoke(
            cli,
            ["session"],
            input="create\nGadget\n9.99\nA gadget\nquit\n",
        )

        assert result.exit_code == 0, result.output
        assert "Success: Product created!" in result.output
        assert service.products[2]["nome"] == "Gadget"

    def test_edit_then_list(self, runner, service):
        result = runner.invoke(
            cli,
            ["session"],
            input="edit\n1\n\n20\n\nlist\nquit\n",
        )

        assert result.exit_code == 0, result.output
        assert "Editing product #1" in result.output
        assert "Success: Product updated!" in result.output
        assert service.products[1]["preco"] == 20.0
        assert service.products[1]["nome"] == "Widget"

    def test_search_without_id_reports_error(self, runner, service):
        result = runner.invoke(cli, ["session"], input="search\n\nquit\n")

        assert result.exit_code == 0, result.output
        assert "missing id" in result.output

    def test_delete(self, runner, service):
        result = runner.invoke(cli, ["session"], input="delete\n1\nquit\n")

        assert result.exit_code == 0, result.output
        assert "Success: Product deleted!" in result.output
        assert service.products == {}
