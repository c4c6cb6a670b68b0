"""HTTP tests for /ai with the model replaced by canned responses."""


def _by_id(client):
    return {todo["id"]: todo for todo in client.get("/todos").json()}


def test_mark_task_done_by_id(make_client, seed):
    milk, book = seed("Buy milk", "Read book")
    client, llm = make_client([f'{{"intent": "update", "id": {book.id}, "done": true}}'])

    response = client.post("/ai", json={"prompt": "mark task 2 as done"})

    assert response.status_code == 200
    assert [(todo["id"], todo["done"]) for todo in response.json()] == [(book.id, True)]
    todos = _by_id(client)
    assert todos[book.id]["done"] is True
    assert todos[milk.id]["done"] is False
    assert '"mark task 2 as done"' in llm.prompts[0]


def test_delete_last_task(make_client, seed):
    milk, book = seed("Buy milk", "Read book")
    client, _ = make_client(['```json\n{"intent": "delete", "position": -1}\n```'])

    response = client.post("/ai", json={"prompt": "delete last task"})

    assert response.status_code == 200
    assert [todo["id"] for todo in response.json()] == [book.id]
    assert list(_by_id(client)) == [milk.id]


def test_create(make_client):
    client, _ = make_client(['{"intent": "create", "task": "Walk the dog"}'])

    response = client.post("/ai", json={"prompt": "remind me to walk the dog"})

    assert response.status_code == 201
    assert response.json()["task"] == "Walk the dog"
    assert response.json()["done"] is False


def test_create_without_task(make_client):
    client, _ = make_client(['{"intent": "create"}'])

    response = client.post("/ai", json={"prompt": "add something"})

    assert response.status_code == 400
    assert response.json() == {"error": "Task description required for create"}


def test_read(make_client, seed):
    seed("Buy milk", "Read book")
    client, _ = make_client(['{"intent": "read"}'])

    response = client.post("/ai", json={"prompt": "what do I have to do?"})

    assert response.status_code == 200
    assert [todo["task"] for todo in response.json()] == ["Buy milk", "Read book"]


def test_rename_by_text_fragment(make_client, seed):
    milk, book = seed("Buy milk", "Read book")
    client, _ = make_client(['{"intent": "update", "task": "READ BOOK", "newTask": "Read novel"}'])

    response = client.post("/ai", json={"prompt": "change 'read book' to 'read novel'"})

    assert response.status_code == 200
    assert [(todo["id"], todo["task"]) for todo in response.json()] == [(book.id, "Read novel")]


def test_update_first_by_position(make_client, seed):
    milk, book = seed("Buy milk", "Read book")
    client, _ = make_client(['{"intent": "update", "position": 1, "done": true}'])

    response = client.post("/ai", json={"prompt": "update first to done"})

    assert response.status_code == 200
    assert _by_id(client)[milk.id]["done"] is True


def test_position_out_of_range(make_client, seed):
    seed("Buy milk", "Read book")
    client, _ = make_client(['{"intent": "delete", "position": 5}'])

    response = client.post("/ai", json={"prompt": "delete the fifth task"})

    assert response.status_code == 404
    assert response.json() == {"error": "No task found at position 5"}
    assert len(_by_id(client)) == 2


def test_text_fragment_without_match(make_client, seed):
    seed("Buy milk")
    client, _ = make_client(['{"intent": "delete", "task": "laundry"}'])

    response = client.post("/ai", json={"prompt": "delete laundry"})

    assert response.status_code == 404


def test_update_without_reference(make_client, seed):
    seed("Buy milk")
    client, _ = make_client(['{"intent": "update", "done": true}'])

    response = client.post("/ai", json={"prompt": "mark it done"})

    assert response.status_code == 400
    assert response.json() == {"error": "Need either id, position, or task text for update"}


def test_unknown_intent(make_client):
    client, _ = make_client(['{"intent": "archive"}'])

    response = client.post("/ai", json={"prompt": "archive everything"})

    assert response.status_code == 400
    assert response.json() == {"error": "Unknown intent from AI"}


def test_unparseable_model_output(make_client):
    client, _ = make_client(["I think you want to delete a task."])

    response = client.post("/ai", json={"prompt": "delete a task"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse Gemini response as JSON"}


def test_model_failure(make_client):
    client, _ = make_client(["raise:quota exceeded"])

    response = client.post("/ai", json={"prompt": "show tasks"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process AI request"}


def test_missing_prompt(make_client):
    client, llm = make_client()

    response = client.post("/ai", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Prompt is required"}
    assert llm.prompts == []


def test_fractional_position_deletes_nothing(make_client, seed):
    seed("Buy milk", "Read book")
    client, _ = make_client(['{"intent": "delete", "position": 1.5, "task": "book"}'])

    response = client.post("/ai", json={"prompt": "delete the book task"})

    assert response.status_code == 404
    assert response.json() == {"error": "No task found at position 1.5"}
    assert len(_by_id(client)) == 2


def test_delete_id_beyond_store_range_is_a_no_op(make_client, seed):
    seed("Buy milk")
    client, _ = make_client(['{"intent": "delete", "id": 99999999999999999999}'])

    response = client.post("/ai", json={"prompt": "delete task 99999999999999999999"})

    assert response.status_code == 200
    assert response.json() == []
    assert len(_by_id(client)) == 1
