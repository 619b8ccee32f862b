"""Run the development server: ``python -m linkhub``."""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "linkhub.main:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "3000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
