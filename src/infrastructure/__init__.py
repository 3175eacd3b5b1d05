"""
Infrastructure Layer

Contains all external dependencies and implementations:
- In-memory session and cart stores
- Telegram messenger gateway
- Commerce backend HTTP client
- Logging infrastructure
"""
