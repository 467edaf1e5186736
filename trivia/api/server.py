import os

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from trivia.api.gemini import GeminiTextGenerator
from trivia.quiz.domain.ports import ITextGenerator
from trivia.shared.telemetry import Telemetry

GENERATE_PATH = "/api/generateTrivia"
GENERATION_FAILED = "Failed to generate questions"

telemetry = Telemetry("GenerateTriviaAPI")


def create_app(generator: ITextGenerator | None = None) -> FastAPI:
    app = FastAPI(title="trivia-proxy")
    app.state.generator = generator or GeminiTextGenerator()

    @app.post(GENERATE_PATH)
    async def generate_trivia(request: Request):
        Telemetry.start_trace()
        try:
            body = await request.json()
            prompt = body["prompt"]
            if not isinstance(prompt, str) or not prompt.strip():
                raise ValueError("prompt must be a non-empty string")
            text = await request.app.state.generator.generate(prompt)
        except Exception as e:
            telemetry.log_error("Error generating content", e)
            return JSONResponse({"error": GENERATION_FAILED}, status_code=500)

        return {"text": text}

    # Every non-POST method gets a bare 405, including OPTIONS.
    @app.api_route(
        GENERATE_PATH, methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    async def method_not_allowed():
        return Response(status_code=405)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "trivia.api.server:app",
        host="0.0.0.0",
        port=int(os.getenv("TRIVIA_PROXY_PORT", "8001")),
    )
