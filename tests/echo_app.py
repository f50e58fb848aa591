"""A small FastAPI application the client tests talk to over real sockets."""
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response


TOKEN = "secret-token"

app = FastAPI()


@app.api_route("/echo", methods=["GET", "HEAD", "POST", "PUT", "DELETE"])
async def echo(request: Request):
    """Echoes back what the server saw of the request."""
    body = await request.body()
    return {
        "method": request.method,
        "query": dict(request.query_params),
        "content_type": request.headers.get("content-type"),
        "headers": dict(request.headers),
        "body": body.decode("utf-8"),
    }


@app.options("/token")
async def issue_token():
    """Hands out a bearer token as plain text."""
    return PlainTextResponse(TOKEN)


@app.post("/submissions", status_code=201)
async def create_submission(request: Request):
    """Accepts a JSON submission when the bearer token matches."""
    if request.headers.get("authorization") != f"Bearer {TOKEN}":
        raise HTTPException(status_code=401, detail="Missing or invalid token.")
    payload = await request.json()
    return {"received": payload}


@app.get("/status/{code}")
async def respond_with_status(code: int):
    """Returns an empty JSON object with the requested status code."""
    return JSONResponse({"code": code}, status_code=code)


@app.get("/text")
async def text():
    return PlainTextResponse("plain text, not json")


@app.get("/broken-json")
async def broken_json():
    return Response(content="{not json", media_type="application/json")


@app.get("/redirect")
async def redirect():
    return RedirectResponse("/echo")
