"""Users — a small tern app with templates, forms, and a route self-test.

Demonstrates ordered routing (``/users/create`` registered before
``/users/:id``), post-redirect after a form submission, a template-backed
404 page, a live-reloading page, and match cases checked at startup.

Run:
    python app.py

Or through the CLI:
    tern routes app:app
    tern verify app:app cases.json
"""

import logging
from pathlib import Path

from tern import App, LiveReload, Request, RequestContext, RouterConfig
from tern.verify import load_cases

HERE = Path(__file__).parent

logger = logging.getLogger("users")

USERS = [
    {"id": 1, "name": "User 1"},
    {"id": 2, "name": "User 2"},
]

app = App(
    RouterConfig(template_dir=str(HERE / "templates")),
    self_test=load_cases(HERE / "cases.json"),
)

app.add_interceptor(
    LiveReload(
        "live-reload",
        page="/live",
        template="home.html",
        context={"title": "Home Page (live)", "links": []},
    )
)


@app.route("/")
async def home(ctx: RequestContext):
    return await ctx.render(
        "home.html",
        {
            "title": "Home Page",
            "links": [
                {"href": "/users", "text": "Users"},
                {"href": "/posts", "text": "Posts"},
                {"href": "/users/create", "text": "Create User"},
            ],
        },
    )


@app.route("/users")
async def list_users(ctx: RequestContext):
    return await ctx.render("users/list.html", {"users": USERS, "message": ctx.query.get("message")})


@app.route("/users/create")
async def create_form(ctx: RequestContext):
    return await ctx.render("users/create.html")


@app.route(
    "/users/create",
    methods="POST",
    redirect_to="/users?message=User%20Created%20Successfully",
)
def create_user(body):
    logger.info("creating user: %s", body)
    USERS.append({"id": len(USERS) + 1, "name": body.get("username", "")})


@app.route("/users/:id")
async def user_detail(ctx: RequestContext, id: str):
    return await ctx.render("users/detail.html", {"user_id": id, "message": ctx.query.get("message")})


# Interceptors only run for matched routes; LiveReload halts before this runs
@app.route("/live")
def live():
    return "Live reload streams from this path."


@app.error(404)
async def not_found(request: Request):
    html = await app.renderer.render_async("404.html", {"path": request.path})
    return html, 404


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run()
