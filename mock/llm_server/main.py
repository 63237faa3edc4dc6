from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import StreamingResponse
import json
import os

app = FastAPI(title="Mock Language Model Server", version="1.0.0")
# Reply split into streamed chunks; override with MOCK_LLM_REPLY
REPLY = os.environ.get(
    "MOCK_LLM_REPLY",
    "**SIP** means investing a fixed amount every month. This is for informational purposes only.",
)

@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/models/{model}:streamGenerateContent")
async def stream_generate(model: str, request: Request, alt: str = "json"):
    if not request.headers.get("x-goog-api-key"):
        raise HTTPException(status_code=401, detail="missing api key")
    body = await request.json()
    if not body.get("contents"):
        raise HTTPException(status_code=400, detail="contents required")

    words = REPLY.split(" ")
    def events():
        for i, word in enumerate(words):
            text = word if i == len(words) - 1 else word + " "
            chunk = {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}
            yield f"data: {json.dumps(chunk)}\r\n\r\n"
        yield f"data: {json.dumps({'candidates': [{'finishReason': 'STOP'}]})}\r\n\r\n"
    return StreamingResponse(events(), media_type="text/event-stream")
