import uvicorn
from fastapi import FastAPI

from chartgpt.agents.chart.router import page_router as chart_page_router
from chartgpt.agents.chart.router import router as chart_router
from chartgpt.core.config import settings
from chartgpt.core.logging import setup_logging
from chartgpt.middleware.cors import setup_cors

setup_logging()


app = FastAPI(title="ChartGPT API")

setup_cors(app)

app.include_router(chart_router)
app.include_router(chart_page_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    uvicorn.run("chartgpt.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
