"""
Chat orchestration.

Responsibilities:
- Validate chat requests and clean up UI message history.
- Hold the system prompts for the travel and retail modes.
- Define the tools the model may call and run them safely.
- Encode the streamed response in the AI SDK data stream format.
"""
