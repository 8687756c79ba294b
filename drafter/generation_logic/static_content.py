"""Fixed texts of the drafting pipeline and the dialogue protocol."""

# Texts of the dialogue protocol
SEED_ACKNOWLEDGEMENT = (
    "Understood. I have read the current draft report and will use it as the basis for this conversation. "
    "When you ask for changes I will produce the complete revised report and apply it with the update_report tool."
)

SEED_DOCUMENT_PREAMBLE = "Here is the current draft of the sustainability report. Keep it as the working document:"

REPORT_UPDATED_REPLY = "Report updated."

TOOL_FOLLOWUP_FAILED_REPLY = "The report has been updated, but the assistant could not finish its reply. You can continue the conversation."

INTERRUPTED_REPLY = "The report update was interrupted and has not been applied. Please repeat your request."

APOLOGY_REPLY = "Sorry, something went wrong while processing your message. Please try again."

EMPTY_REPLY = "I have no answer to that yet. Could you rephrase or add more detail?"

GREETING_INSTRUCTION = (
    "The draft report has just been generated. Greet the user briefly, then look at the "
    "'### Missing Information' list at the end of the report and ask the user for the first item on it. "
    "If the list is empty, ask which section they would like to refine first."
)

UPDATE_REPORT_TOOL_NAME = "update_report"

UPDATE_REPORT_TOOL_DESCRIPTION = (
    "Replace the whole report with a revised version. Call this whenever the user provides new data "
    "or asks for a change to the report. Always pass the complete Markdown report, not only the changed part."
)

UPDATE_REPORT_TOOL_PARAMETERS = {
    "type": "object",
    "properties": {
        "new_content": {
            "type": "string",
            "description": "The complete revised report in Markdown.",
        },
    },
    "required": ["new_content"],
}

SOURCES_HEADING = "### Sources"
