from fastapi import FastAPI
import uvicorn

from tempora.api import drafts, health
from tempora.logging import configure_logging

configure_logging()

app = FastAPI(title="tempora")
app.include_router(health.router)
app.include_router(drafts.router)

if __name__ == "__main__":
    uvicorn.run("tempora.main:app", host="0.0.0.0", port=8000, reload=True)
