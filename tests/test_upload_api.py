from autotest.config.settings import settings

INVOICE = b"class Invoice:\n    def total(self):\n        return 1\n\n    def __repr__(self):\n        return 'Invoice'\n"
CART = b"class Cart {\n  add(item) {\n    this.items.push(item)\n  }\n}\n"


def upload(test_client, auth, *files):
    return test_client.post(
        "/api/upload-files",
        files=[("files", (name, content, "text/plain")) for name, content in files],
        headers=auth["headers"],
    )


def test_upload_analyses_source_files(test_client, auth):
    response = upload(test_client, auth, ("billing/invoice.py", INVOICE), ("web/cart.js", CART))
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Successfully processed 2 files"
    assert data["totalFiles"] == 2
    assert data["totalSize"] == len(INVOICE) + len(CART)

    invoice = data["files"][0]
    assert invoice["name"] == "invoice.py"
    assert invoice["path"] == "billing/invoice.py"
    assert invoice["type"] == "Python"
    assert invoice["size"] == len(INVOICE)
    assert invoice["analysis"]["language"] == "python"
    assert invoice["analysis"]["complexity"] == "low"
    assert invoice["analysis"]["linesOfCode"] == 5
    assert invoice["analysis"]["testableElements"] == ["Invoice", "total"]
    assert data["files"][1]["analysis"]["testableElements"] == ["Cart", "add"]

    project = data["projectAnalysis"]
    assert project["totalFiles"] == 2
    assert project["languages"] == {"python": 1, "javascript": 1}
    assert project["directories"] == {"billing": 1, "web": 1}
    assert project["testableClasses"] == 4
    assert project["estimatedTestFiles"] == 4
    assert project["complexity"] == "low"
    assert project["recommendations"] == []

    assert data["inputData"].startswith("// File: billing/invoice.py\nclass Invoice:")
    assert "// File: web/cart.js\nclass Cart {" in data["inputData"]


def test_unsupported_files_are_skipped(test_client, auth):
    response = upload(test_client, auth, ("notes.txt", b"hello"), ("invoice.py", INVOICE))
    assert response.status_code == 200
    data = response.json()
    assert [f["name"] for f in data["files"]] == ["invoice.py"]
    assert data["totalSize"] == len(INVOICE)


def test_file_over_size_limit_is_rejected(test_client, auth, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_file_bytes", 16)
    response = upload(test_client, auth, ("small.py", b"x = 1\n"), ("big.py", INVOICE))
    assert response.status_code == 400
    assert response.json()["error"].startswith("File big.py is too large.")


def test_total_size_limit_is_rejected(test_client, auth, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_total_bytes", len(INVOICE) + 10)
    response = upload(test_client, auth, ("a.py", INVOICE), ("b.py", INVOICE))
    assert response.status_code == 400
    assert response.json()["error"].startswith("Total upload size exceeds")


def test_upload_requires_files(test_client, auth):
    response = test_client.post("/api/upload-files", headers=auth["headers"])
    assert response.status_code == 400
    assert response.json() == {"error": "No files provided"}


def test_upload_requires_authentication(test_client):
    response = test_client.post(
        "/api/upload-files", files=[("files", ("invoice.py", INVOICE, "text/plain"))]
    )
    assert response.status_code == 401


def test_uploaded_input_feeds_generation(test_client, auth, fake_ai):
    input_data = upload(test_client, auth, ("invoice.py", INVOICE)).json()["inputData"]

    response = test_client.post(
        "/api/generate-tests",
        json={"inputType": "code", "inputData": input_data, "testTypes": ["unit"], "language": "python"},
        headers=auth["headers"],
    )
    assert response.status_code == 200
    assert '"name": "invoice.py"' in fake_ai.calls[0]["prompt"]
