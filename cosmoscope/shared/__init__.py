"""
Shared infrastructure.

Modules:
- llm: OpenAI client with retry logic and the assistant backend
- logging: Structured JSON logging
- schemas: Chat and geographic models
"""
