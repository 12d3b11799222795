# tests/test_stores.py
import uuid

from app.db.stores import PresentationRequestStore, VerifierStore


def test_verifier_patch_is_optimistic(run):
    store = VerifierStore()
    v = run(store.get_default)
    assert v.verifier_did == "did:example:verifier"

    assert run(store.patch, v.uuid, auth_token="t1", expected_version=v.version) is True
    # una segunda escritura con la versión ya leída pierde
    assert run(store.patch, v.uuid, auth_token="t-stale", expected_version=v.version) is False

    current = run(store.get_default)
    assert current.uuid == v.uuid
    assert current.auth_token == "t1"
    assert current.version == v.version + 1


def test_find_one_by_uuid_or_latest_id(run):
    store = PresentationRequestStore()
    pr_id = f"pr-id-{uuid.uuid4().hex[:8]}"
    first = run(store.create, pr_uuid=f"pr-uuid-{uuid.uuid4().hex[:8]}", pr_id=pr_id)
    second = run(store.create, pr_uuid=f"pr-uuid-{uuid.uuid4().hex[:8]}", pr_id=pr_id)

    assert run(store.find_one, pr_uuid=first.pr_uuid).uuid == first.uuid
    assert run(store.find_one, pr_id=pr_id).uuid == second.uuid
    assert run(store.find_one, pr_uuid="missing") is None
    assert run(store.find_one) is None
