import uvicorn

from subtitle_payload.app import app

if __name__ == "__main__":
    uvicorn.run("subtitle_payload.app:app", host="0.0.0.0", port=8000, reload=True)
