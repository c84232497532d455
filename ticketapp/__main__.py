import uvicorn

from .core.config import settings


def main():
    uvicorn.run("ticketapp.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)


if __name__ == "__main__":
    main()
