import socket
import threading
import time

import pytest
import uvicorn

from echo_app import app


@pytest.fixture(scope="session")
def live_server():
    """Runs the echo app under uvicorn on an ephemeral port for the whole session."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    host, port = sock.getsockname()

    server = uvicorn.Server(uvicorn.Config(app, log_level="warning", lifespan="off"))
    server_thread = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, daemon=True)
    server_thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline or not server_thread.is_alive():
            pytest.fail("uvicorn did not start in time")
        time.sleep(0.01)

    try:
        yield f"http://{host}:{port}"
    finally:
        server.should_exit = True
        server_thread.join(timeout=5)
        sock.close()


@pytest.fixture
def unused_port() -> int:
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port
