"""Tests for sprig.views — layouts, page routes, not-found pages, partials."""

import pytest

from sprig.errors import ConfigurationError, ViewNotFound
from sprig.http.request import RequestContext
from sprig.http.response import Response
from sprig.routing.dispatcher import Dispatcher
from sprig.views import PartialRenderer, ViewInvoker, ViewRenderer, ViewRoutes, ViewTarget


@pytest.fixture
def views_dir(tmp_path):
    views = tmp_path / "views"
    (views / "layouts").mkdir(parents=True)
    (views / "users").mkdir()
    (views / "home.html").write_text("<p>Hello {{ name }}</p>")
    (views / "users" / "show.html").write_text("<p>User {{ id }} of {{ team }}</p>")
    (views / "layouts" / "main.html").write_text("<main>{{ content }}</main>")
    (views / "layouts" / "admin.html").write_text("<admin>{{ title }}|{{ content }}</admin>")
    return views


@pytest.fixture
def renderer(views_dir) -> ViewRenderer:
    return ViewRenderer(views_dir, views_dir / "layouts")


def _get(path: str) -> RequestContext:
    return RequestContext.from_uri("GET", path)


class TestViewRenderer:
    def test_wraps_in_default_layout(self, renderer: ViewRenderer) -> None:
        html = renderer.render("home", {"name": "Ada"})
        assert html == "<main><p>Hello Ada</p></main>"

    def test_explicit_layout(self, renderer: ViewRenderer) -> None:
        html = renderer.render("home", {"name": "Ada", "title": "Admin"}, "admin")
        assert html == "<admin>Admin|<p>Hello Ada</p></admin>"

    def test_no_layout(self, renderer: ViewRenderer) -> None:
        assert renderer.render("home", {"name": "Ada"}, "none") == "<p>Hello Ada</p>"

    def test_missing_layout_renders_unwrapped(self, renderer: ViewRenderer) -> None:
        assert renderer.render("home", {"name": "Ada"}, "missing") == "<p>Hello Ada</p>"

    def test_missing_view(self, renderer: ViewRenderer) -> None:
        with pytest.raises(ViewNotFound):
            renderer.render("nope")

    def test_context_is_escaped(self, renderer: ViewRenderer) -> None:
        html = renderer.render("home", {"name": "<script>"}, "none")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_nested_view_name(self, renderer: ViewRenderer) -> None:
        assert renderer.has_view("users/show")
        assert renderer.template_name("/users/show") == "users/show.html"

    def test_default_layouts_dir(self, views_dir) -> None:
        assert ViewRenderer(views_dir).layouts_dir == views_dir / "layouts"


class TestViewRoutes:
    async def test_renders_page(self, renderer: ViewRenderer) -> None:
        pages = ViewRoutes()
        pages.get("/", "home", {"name": "Ada"})
        dispatcher = Dispatcher(pages.table, ViewInvoker(renderer), prefix=None)

        response = await dispatcher.run(_get("/"))
        assert response.status == 200
        assert response.content_type.startswith("text/html")
        assert response.text == "<main><p>Hello Ada</p></main>"

    async def test_params_override_static_data(self, renderer: ViewRenderer) -> None:
        pages = ViewRoutes()
        pages.get("/users/{id}", "users/show", {"id": "static", "team": "core"}, layout="none")
        dispatcher = Dispatcher(pages.table, ViewInvoker(renderer), prefix=None)

        response = await dispatcher.run(_get("/users/7"))
        assert response.text == "<p>User 7 of core</p>"

    async def test_post_page(self, renderer: ViewRenderer) -> None:
        pages = ViewRoutes()
        route = pages.post("/submit", "home", layout="none")
        assert route.method == "POST"
        assert isinstance(route.handler, ViewTarget)
        dispatcher = Dispatcher(pages.table, ViewInvoker(renderer), prefix=None)
        response = await dispatcher.run(RequestContext.from_uri("POST", "/submit"))
        assert response.status == 200

    async def test_callable_handlers(self, renderer: ViewRenderer) -> None:
        pages = ViewRoutes()
        pages.get("/raw", lambda: "<b>raw</b>")
        pages.get("/target/{name}", lambda params: ViewTarget("home", layout="none"))
        pages.get("/teapot", lambda: Response("tea", status=418))
        dispatcher = Dispatcher(pages.table, ViewInvoker(renderer), prefix=None)

        assert (await dispatcher.run(_get("/raw"))).text == "<b>raw</b>"
        assert (await dispatcher.run(_get("/target/Bo"))).text == "<p>Hello Bo</p>"
        assert (await dispatcher.run(_get("/teapot"))).status == 418

    async def test_missing_view_is_500_page(self, renderer: ViewRenderer) -> None:
        pages = ViewRoutes()
        pages.get("/ghost", "ghost")
        dispatcher = Dispatcher(pages.table, ViewInvoker(renderer), prefix=None)

        response = await dispatcher.run(_get("/ghost"))
        assert response.status == 500
        assert response.text.startswith("<h1>500")


class TestNotFound:
    async def test_fallback_heading(self, renderer: ViewRenderer) -> None:
        dispatcher = Dispatcher(ViewRoutes().table, ViewInvoker(renderer), prefix=None)
        response = await dispatcher.run(_get("/missing"))
        assert response.status == 404
        assert response.text == "<h1>404 - Page not found</h1>"

    async def test_custom_not_found_view(self, renderer: ViewRenderer, views_dir) -> None:
        (views_dir / "404.html").write_text("<section>{{ error }}</section>")
        dispatcher = Dispatcher(ViewRoutes().table, ViewInvoker(renderer), prefix=None)
        response = await dispatcher.run(_get("/missing"))
        assert response.status == 404
        assert response.text == "<main><section>404 - Page not found</section></main>"


class TestPartialRenderer:
    def test_render(self, tmp_path) -> None:
        (tmp_path / "card.html").write_text("<div>{{ title }}</div>")
        partials = PartialRenderer(tmp_path)
        assert partials.render("card", title="Hi") == "<div>Hi</div>"
        assert partials.exists("card")

    def test_missing_partial(self, tmp_path) -> None:
        with pytest.raises(ViewNotFound):
            PartialRenderer(tmp_path).render("nope")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            PartialRenderer(tmp_path / "absent")
