import unittest

from fastapi.testclient import TestClient

from organaizer.api import create_app
from organaizer.config import Settings


class FakeClient:
    def __init__(self, response=""):
        self.response = response

    def complete(self, messages, temperature):
        return self.response


TREE = {
    "type": "directory",
    "name": "root",
    "path": "/root",
    "children": [
        {"type": "file", "name": "a.jpg", "path": "/root/a.jpg", "extension": ".jpg",
         "stats": {"size": 10, "mtime": "2024-01-01T00:00:00Z"}},
        {"type": "file", "name": "b.pdf", "path": "/root/b.pdf", "extension": ".pdf",
         "stats": {"size": 20, "mtime": "2024-02-01T00:00:00Z"}},
    ],
}


class TestAPI(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(Settings()))

    def test_status(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "OrganAIzer API is running")
        self.assertFalse(response.json()["aiEnabled"])

    def test_missing_folder_data(self):
        response = self.client.post("/organize", json={"option": "categorize"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Missing folder data"})

    def test_empty_folder_object(self):
        response = self.client.post("/organize", json={"folderData": {}, "option": "rename"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["suggestions"], [])

    def test_invalid_option(self):
        response = self.client.post("/organize", json={"folderData": TREE, "option": "shred"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid option"})

    def test_bad_body_type(self):
        response = self.client.post("/organize", json={"folderData": TREE, "option": "search", "userInput": ["x"]})
        self.assertEqual(response.status_code, 400)

    def test_categorize(self):
        response = self.client.post("/organize", json={"folderData": TREE, "option": "categorize"})
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["aiStatus"], "disabled")
        self.assertEqual(body["filesByCategory"]["Images"][0]["name"], "a.jpg")
        self.assertEqual(body["filesByCategory"]["Documents"][0]["name"], "b.pdf")

    def test_rename_default_pattern(self):
        response = self.client.post("/organize", json={"folderData": TREE, "option": "rename"})
        names = [s["suggestedName"] for s in response.json()["suggestions"]]
        self.assertEqual(names, ["a_1.jpg", "b_2.pdf"])

    def test_suggest_stats(self):
        body = self.client.post("/organize", json={"folderData": TREE, "option": "suggest"}).json()

        self.assertEqual(body["folderStats"]["totalSize"], 30)
        self.assertEqual(body["folderStats"]["newestFile"]["name"], "b.pdf")

    def test_ai_search(self):
        app = create_app(Settings(api_key="k"), client=FakeClient('"b.pdf": 77'))
        body = TestClient(app).post(
            "/organize", json={"folderData": TREE, "option": "search", "userInput": "the document"}
        ).json()

        self.assertNotIn("aiStatus", body)
        self.assertEqual(body["matches"][0]["relevanceScore"], 77)

    def test_unexpected_error_is_500(self):
        app = create_app(Settings())
        app.state.organizer._handlers["categorize"] = lambda *a: 1 / 0
        response = TestClient(app).post("/organize", json={"folderData": TREE, "option": "categorize"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Error processing request")


if __name__ == "__main__":
    unittest.main()
