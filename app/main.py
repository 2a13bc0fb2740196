import uvicorn
from dotenv import load_dotenv

load_dotenv()

from server import server  # noqa: E402

server_app = server.handler


def main():
    """Run the API with uvicorn."""
    uvicorn.run("main:server_app", host="0.0.0.0", port=8000, proxy_headers=True)


if __name__ == "__main__":
    main()
