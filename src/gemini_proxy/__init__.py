"""
Gemini Proxy package.

Provides:
- A single configurable request pipeline that forwards a prompt to Gemini
- Netlify/Lambda-style function handlers, one per variant
- A FastAPI app and CLI for local serving
"""
