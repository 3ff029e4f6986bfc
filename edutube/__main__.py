import uvicorn

from edutube.app.config import settings


def main() -> None:
    uvicorn.run("edutube.app.main:app", host=settings.HOST, port=settings.PORT, reload=False)


if __name__ == "__main__":
    main()
