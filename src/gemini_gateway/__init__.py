"""
Gemini Gateway package.

Provides:
- An HTTP gateway (FastAPI) forwarding text and uploaded media to Gemini
- A thin httpx client for the Gemini generateContent API
"""
