"""
schemas.py

PURPOSE: JSON schema of the code completion tool exposed to agents.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
A protocol server lists this definition and forwards tool arguments to
CodeAssistant.handle(). Only complete, fix and test are exposed; infill
has its own entry point.
"""

CODE_COMPLETION_TOOL_NAME = "code_completion"

CODE_COMPLETION_TOOL = {
    "name": CODE_COMPLETION_TOOL_NAME,
    "description": "Complete code, fix bugs, or generate tests using Mistral Codestral",
    "inputSchema": {
        "type": "object",
        "properties": {
            "code": {
                "type": "string",
                "description": "The code to process",
            },
            "language": {
                "type": "string",
                "description": "Programming language (optional)",
            },
            "task": {
                "type": "string",
                "enum": ["complete", "fix", "test"],
                "description": (
                    "Type of task: 'complete' for code completion, 'fix' for bug fixing, "
                    "'test' for test generation"
                ),
            },
        },
        "required": ["code", "task"],
    },
}
