import pytest
from fastapi.testclient import TestClient

from bucketbook.api.deps import get_uow
from bucketbook.main import app
from bucketbook.repositories.memory import MemoryUnitOfWork

API = "/api/v1"

@pytest.fixture
def client(store):
    app.dependency_overrides[get_uow] = lambda: MemoryUnitOfWork(store)
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def account(client):
    response = client.post(f"{API}/users", json={
        "username": "sam",
        "email": "sam@example.com",
        "name": "Sam"
    })
    assert response.status_code == 201
    body = response.json()
    return {
        "user_id": body["user"]["id"],
        "buckets": {bucket["name"]: bucket["id"] for bucket in body["buckets"]}
    }

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

def test_user_id_is_required(client):
    response = client.get(f"{API}/buckets")
    assert response.status_code == 422

def test_new_user_gets_starter_buckets(client, account):
    response = client.get(f"{API}/buckets", params={"user_id": account["user_id"]})
    
    assert response.status_code == 200
    buckets = response.json()["buckets"]
    assert len(buckets) == 4
    assert buckets[0]["allocatedAmount"] == "0.00"
    assert buckets[0]["currentBalance"] == "0.00"
    assert buckets[0]["iconName"] == "Shopping"

def test_allocate_reallocate_flow(client, account):
    params = {"user_id": account["user_id"]}
    groceries = account["buckets"]["Groceries"]
    dining = account["buckets"]["Dining Out"]
    
    response = client.post(f"{API}/income", params=params, json={"amount": "500.00", "description": "Salary"})
    assert response.status_code == 201
    assert response.json()["incomeRecord"]["kind"] == "income"
    
    response = client.post(f"{API}/buckets/allocate", params=params, json={
        "allocations": {groceries: "100.00", dining: "50", "skipped": "oops"},
        "description": "Payday"
    })
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Funds allocated successfully"
    assert body["unallocated"] == "350.00"
    assert body["overAllocated"] == False
    assert [b["allocatedAmount"] for b in body["buckets"]] == ["100.00", "50.00"]
    
    response = client.post(f"{API}/buckets/reallocate", params=params, json={
        "sourceBucketId": groceries,
        "destinationBucketId": dining,
        "amount": "30",
        "transferType": "balance"
    })
    assert response.status_code == 200
    source, destination = response.json()["buckets"]
    assert source["currentBalance"] == "70.00"
    assert source["allocatedAmount"] == "100.00"
    assert destination["currentBalance"] == "80.00"
    
    response = client.post(f"{API}/buckets/reallocate", params=params, json={
        "sourceBucketId": dining,
        "destinationBucketId": None,
        "amount": "40",
        "transferType": "balance"
    })
    assert response.status_code == 200
    
    summary = client.get(f"{API}/summary", params=params).json()
    assert summary == {
        "totalIncome": "500.00",
        "totalAllocated": "110.00",
        "totalRemaining": "110.00",
        "unallocated": "390.00"
    }
    
    history = client.get(f"{API}/allocations", params=params).json()["allocationHistory"]
    assert [entry["transferType"] for entry in history] == [
        "reallocation", "reallocation", "allocation", "allocation"
    ]
    assert history[0]["destinationBucketId"] is None
    assert history[0]["amount"] == "40.00"
    
    limited = client.get(f"{API}/allocations", params={**params, "limit": 1}).json()
    assert len(limited["allocationHistory"]) == 1

def test_reallocate_insufficient_funds(client, account):
    params = {"user_id": account["user_id"]}
    groceries = account["buckets"]["Groceries"]
    
    response = client.post(f"{API}/buckets/reallocate", params=params, json={
        "sourceBucketId": groceries,
        "destinationBucketId": None,
        "amount": "1",
        "transferType": "allocation"
    })
    
    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient funds. Available: $0.00"

def test_reallocate_rejects_unknown_transfer_type(client, account):
    response = client.post(f"{API}/buckets/reallocate", params={"user_id": account["user_id"]}, json={
        "sourceBucketId": account["buckets"]["Groceries"],
        "destinationBucketId": None,
        "amount": "1",
        "transferType": "everything"
    })
    assert response.status_code == 422

def test_other_users_bucket_is_404(client, account):
    response = client.post(f"{API}/buckets/allocate", params={"user_id": "intruder"}, json={
        "allocations": {account["buckets"]["Groceries"]: "10"}
    })
    assert response.status_code == 404
    
    response = client.get(f"{API}/buckets/{account['buckets']['Groceries']}", params={"user_id": "intruder"})
    assert response.status_code == 404

def test_withdraw_and_spend(client, account):
    params = {"user_id": account["user_id"]}
    groceries = account["buckets"]["Groceries"]
    client.post(f"{API}/income", params=params, json={"amount": "100"})
    
    response = client.post(f"{API}/income/withdraw", params=params, json={"amount": "150"})
    assert response.status_code == 400
    
    response = client.post(f"{API}/income/withdraw", params=params, json={"amount": "40"})
    assert response.status_code == 201
    assert response.json()["incomeRecord"]["amount"] == "-40.00"
    
    client.post(f"{API}/buckets/allocate", params=params, json={"allocations": {groceries: "60"}})
    response = client.post(f"{API}/transactions", params=params, json={
        "bucketId": groceries,
        "amount": "12.34",
        "description": "Market"
    })
    assert response.status_code == 201
    transaction_id = response.json()["transaction"]["id"]
    
    bucket = client.get(f"{API}/buckets/{groceries}", params=params).json()["bucket"]
    assert bucket["currentBalance"] == "47.66"
    assert bucket["allocatedAmount"] == "60.00"
    
    listed = client.get(f"{API}/transactions", params={**params, "bucketId": groceries}).json()
    assert [t["id"] for t in listed["transactions"]] == [transaction_id]
    
    response = client.delete(f"{API}/transactions/{transaction_id}", params=params)
    assert response.status_code == 200
    bucket = client.get(f"{API}/buckets/{groceries}", params=params).json()["bucket"]
    assert bucket["currentBalance"] == "60.00"

def test_bucket_crud(client, account):
    params = {"user_id": account["user_id"]}
    
    response = client.post(f"{API}/buckets", params=params, json={"name": "Pets", "iconName": "Paw"})
    assert response.status_code == 201
    bucket_id = response.json()["bucket"]["id"]
    
    response = client.patch(f"{API}/buckets/{bucket_id}", params=params, json={"name": "Pet care"})
    assert response.json()["bucket"]["name"] == "Pet care"
    assert response.json()["bucket"]["iconName"] == "Paw"
    
    response = client.delete(f"{API}/buckets/{bucket_id}", params=params)
    assert response.status_code == 200
    assert client.get(f"{API}/buckets/{bucket_id}", params=params).status_code == 404

def test_duplicate_user_conflict(client, account):
    response = client.post(f"{API}/users", json={
        "username": "sam2",
        "email": "sam@example.com",
        "name": "Sam"
    })
    assert response.status_code == 409

def test_delete_user_data(client, account):
    user_id = account["user_id"]
    
    response = client.delete(f"{API}/users/{user_id}/data")
    assert response.status_code == 200
    assert client.get(f"{API}/buckets", params={"user_id": user_id}).json()["buckets"] == []
    assert client.get(f"{API}/users/{user_id}").status_code == 200
    
    response = client.delete(f"{API}/users/{user_id}")
    assert response.status_code == 200
    assert client.get(f"{API}/users/{user_id}").status_code == 404
