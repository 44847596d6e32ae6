from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional
import logging
import os
from dotenv import load_dotenv

# Load variables from .env file
load_dotenv()

from optimizer.gateway import MISSING_CONTENT_MESSAGE, GatewayError, OptimizationGateway

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)


class PromptRequest(BaseModel):
    content: Optional[str] = None


class PromptResponse(BaseModel):
    optimizedContent: str


class ErrorResponse(BaseModel):
    error: str


def create_app(gateway: Optional[OptimizationGateway] = None) -> FastAPI:
    app = FastAPI(title="Resume Optimizer")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.gateway = gateway or OptimizationGateway()

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        # Bodies that are not {content: string} get the same 400 as missing content.
        logger.warning("Invalid body for %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": MISSING_CONTENT_MESSAGE})

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    @app.post(
        "/api/optimize",
        response_model=PromptResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def optimize_resume(payload: PromptRequest):
        # Sync handler: FastAPI runs it in the threadpool while the model call blocks.
        result = app.state.gateway.optimize(payload.content)
        if isinstance(result, GatewayError):
            logger.warning("Optimize request rejected: %s", result.kind.value)
            return JSONResponse(status_code=result.status_code, content={"error": result.message})
        return PromptResponse(optimizedContent=result.text)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", 8000)))
