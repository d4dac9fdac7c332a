"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Stream chat completions with tool definitions attached.
- Run the multi-step tool loop: collect tool calls, execute them, feed
  results back to the model until it answers or the step budget runs out.
"""
