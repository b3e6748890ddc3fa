"""Configuration, payloads, source interfaces and response types for account and delegation queries."""