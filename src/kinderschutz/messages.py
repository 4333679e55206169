"""Literal replies used when the model cannot answer normally.

None of these ever include raw error text, stack information or the
credential. Operator-directed replies ask an adult to check the setup; the
rest are transient and invite the child to try again.
"""

MISSING_CREDENTIAL_MESSAGE = (
    "Es tut mir leid, ich habe ein Problem mit meiner API-Verbindung. "
    "Ein Erwachsener sollte den API-Schlüssel in den Umgebungsvariablen überprüfen."
)

AUTH_REJECTED_MESSAGE = (
    "Es tut mir leid, ich habe ein Problem mit meiner API-Verbindung. "
    "Der API-Schlüssel scheint ungültig zu sein oder fehlt. "
    "Ein Erwachsener sollte den API-Schlüssel in den Umgebungsvariablen überprüfen."
)

TIMEOUT_MESSAGE = (
    "Es tut mir leid, ich brauche etwas länger zum Nachdenken. "
    "Könntest du deine Frage vielleicht etwas einfacher stellen?"
)

SERVER_ERROR_MESSAGE = (
    "Es tut mir leid, es gibt ein Problem mit der Verbindung zum API-Server. "
    "Dies könnte ein vorübergehendes Problem sein. "
    "Bitte versuche es in einigen Minuten erneut."
)

NETWORK_ERROR_MESSAGE = (
    "Es scheint ein Problem mit der Internetverbindung zu geben. "
    "Bitte prüfe deine Verbindung und versuche es noch einmal."
)

EMPTY_RESPONSE_MESSAGE = (
    "Ich habe gerade technische Schwierigkeiten. "
    "Kannst du mir helfen und deine Nachricht noch einmal senden?"
)

FILTERED_OUTPUT_MESSAGE = (
    "Es tut mir leid, ich kann auf diese Frage nicht antworten. "
    "Lass uns über etwas anderes sprechen. Wie war dein Tag heute?"
)

# Interchangeable replies for failures nothing else classifies.
GENERIC_FALLBACK_MESSAGES = (
    "Entschuldige, ich habe gerade ein Problem. Kannst du das bitte noch einmal sagen?",
    "Ich verstehe dich leider gerade nicht so gut. Magst du es anders ausdrücken?",
    "Es tut mir leid, aber ich kann gerade nicht richtig antworten. "
    "Lass uns in ein paar Minuten noch einmal versuchen zu sprechen.",
    "Ich habe gerade technische Schwierigkeiten. "
    "Kannst du mir helfen und deine Nachricht noch einmal senden?",
)
