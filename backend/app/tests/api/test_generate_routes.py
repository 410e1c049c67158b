import json

import pytest

from app.agent.llm_client import Completion
from app.core.errors import UpstreamEmptyResponse

QUOTE = {
    "ProjectOverview": "Booking portal",
    "ScopeOfWork": [
        {
            "FeatureName": "Bookings",
            "Description": "Customers book slots",
            "Items": [{"ItemName": "Calendar", "Description": "Pick a slot"}],
            "EstimatedHours": 40,
            "EstimatedCost": 4000,
        }
    ],
    "HourlyRate": 100,
    "TotalEstimatedCost": 4000,
}


def _reply(clients, text: str, model: str = "gpt-4"):
    clients.llm.complete.return_value = Completion(text=text, model=model)


@pytest.mark.parametrize(
    ("path", "body"),
    [
        ("/generateQuote", {}),
        ("/generateQuote", {"companyName": "Acme"}),
        ("/generateQuote", {"projectDescription": "Portal"}),
        ("/generateQuote", {"companyName": "", "projectDescription": "Portal"}),
        ("/generateQuote", {"companyName": "Acme", "projectDescription": "   "}),
        ("/generateQuote", {"companyName": "Acme", "projectDescription": "Portal", "hourlyRate": "cheap"}),
        ("/generateQuote", {"companyName": "Acme", "projectDescription": "Portal", "hourlyRate": 0}),
        ("/generateStatementOfWork", {}),
        ("/generateStatementOfWork", {"companyName": "Acme"}),
        ("/generateStatementOfWork", {"projectDescription": "Portal"}),
        ("/generateBoltPrompt", {}),
        ("/generateBoltPrompt", {"companyName": "Acme"}),
        ("/generateBoltPrompt", {"quoteResponse": QUOTE}),
        ("/generateBoltPrompt", {"quoteResponse": {"ScopeOfWork": []}, "companyName": "Acme"}),
        ("/generateUILayout", {}),
        ("/generateUILayout", {"quoteData": {"ProjectOverview": "No scope"}}),
        ("/generateMockup", {}),
        ("/generateMockup", {"quoteData": QUOTE, "quoteId": "q-1"}),
        ("/generateMockup", {"quoteData": QUOTE, "companyName": "Acme"}),
        ("/generateMockup", {"quoteId": "q-1", "companyName": "Acme"}),
    ],
)
def test_missing_fields_are_rejected_without_upstream_call(client, clients, path, body):
    response = client.post(path, json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"] == "Invalid request"
    assert payload["message"]
    clients.llm.complete.assert_not_called()
    clients.mockups.publish.assert_not_called()


def test_generate_quote(client, clients):
    _reply(clients, "```json\n" + json.dumps(QUOTE) + "\n```")

    response = client.post(
        "/generateQuote",
        json={"companyName": "Acme", "projectDescription": "Booking portal", "hourlyRate": 120},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["data"]["ScopeOfWork"][0]["FeatureName"] == "Bookings"
    assert payload["metadata"]["companyName"] == "Acme"
    assert payload["metadata"]["hourlyRate"] == 120
    assert payload["metadata"]["model"] == "gpt-4"


def test_generate_quote_reports_bad_model_output_as_500(client, clients):
    _reply(clients, "I cannot help with that")

    response = client.post("/generateQuote", json={"companyName": "Acme", "projectDescription": "Portal"})

    assert response.status_code == 500
    payload = response.json()
    assert payload == {
        "success": False,
        "error": "Failed to generate quote",
        "message": payload["message"],
    }
    assert "Invalid JSON" in payload["message"]


def test_generate_statement_of_work_upstream_failure(client, clients):
    clients.llm.complete.side_effect = UpstreamEmptyResponse("No response from AI model gpt-4")

    response = client.post(
        "/generateStatementOfWork", json={"companyName": "Acme", "projectDescription": "Portal"}
    )

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to generate statement of work"


def test_generate_bolt_prompt(client, clients):
    _reply(clients, "Build a booking portal.")

    response = client.post("/generateBoltPrompt", json={"quoteResponse": QUOTE, "companyName": "Acme"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["prompt"] == "Build a booking portal."
    assert data["metadata"]["featuresCount"] == 1
    assert data["metadata"]["estimatedCost"] == 4000
    assert data["metadata"]["companyName"] == "Acme"


def test_generate_ui_layout_saves_when_quote_id_given(client, clients):
    layout = {"AppName": "Booking portal", "Components": [{"Type": "Card"}]}
    _reply(clients, json.dumps(layout))

    response = client.post("/generateUILayout", json={"quoteData": QUOTE, "quoteId": "q-1"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["uiLayout"] == layout
    assert payload["metadata"]["quoteId"] == "q-1"
    clients.db.collection.assert_called_with("quotes")
    clients.db.collection.return_value.document.assert_called_with("q-1")
    clients.db.collection.return_value.document.return_value.update.assert_called_once_with({"uiLayout": layout})


def test_generate_ui_layout_without_quote_id_does_not_save(client, clients):
    _reply(clients, json.dumps({"Screens": []}))

    response = client.post("/generateUILayout", json={"quoteData": QUOTE})

    assert response.status_code == 200
    clients.db.collection.assert_not_called()


def test_generate_mockup(client, clients):
    _reply(clients, "<html><title>Acme</title></html>", model="gpt-4o")
    clients.mockups.publish.return_value = "https://storage.example/mockup.png"

    response = client.post(
        "/generateMockup", json={"quoteData": QUOTE, "quoteId": "q-1", "companyName": "Acme"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["mockupUrl"] == "https://storage.example/mockup.png"
    assert "timestamp" in payload
    clients.mockups.publish.assert_awaited_once_with(
        "<html><title>Acme</title></html>", company_name="Acme", quote_id="q-1"
    )
    saved = clients.db.collection.return_value.document.return_value.set.call_args
    assert saved.args[0]["mockupUrl"] == "https://storage.example/mockup.png"
    assert saved.kwargs == {"merge": True}


def test_generate_mockup_storage_failure(client, clients):
    _reply(clients, "<html></html>")
    clients.mockups.publish.side_effect = RuntimeError("bucket unavailable")

    response = client.post(
        "/generateMockup", json={"quoteData": QUOTE, "quoteId": "q-1", "companyName": "Acme"}
    )

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to generate mockup",
        "message": "bucket unavailable",
    }


def test_generate_ui_layout_rejects_nan_without_saving(client, clients):
    _reply(clients, '{"Components": [], "Score": NaN}')

    response = client.post("/generateUILayout", json={"quoteData": QUOTE, "quoteId": "q-1"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to generate UI layout"
    clients.db.collection.assert_not_called()
