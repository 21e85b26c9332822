import pytest

from weightgroups.errors import HookAlreadyRegistered, HookNotRegistered, NotAdmin
from weightgroups.group import GroupContract
from weightgroups.messages import Member, MemberChangedHookMsg, MemberDiff

INIT_ADMIN = "juan"
USER1 = "somebody"
USER2 = "else"
USER3 = "funny"
HEIGHT = 12_345


def make_group() -> GroupContract:
    return GroupContract(
        admin=INIT_ADMIN,
        members=[Member(USER1, 11), Member(USER2, 6)],
        height=HEIGHT,
    )


def assert_users(group, user1, user2, user3, height=None):
    assert group.member(USER1, height) == user1
    assert group.member(USER2, height) == user2
    assert group.member(USER3, height) == user3
    if height is None:
        weights = [user1, user2, user3]
        assert len(group.list_members()) == sum(w is not None for w in weights)
        assert group.total_weight() == sum(w or 0 for w in weights)


def test_proper_instantiation():
    group = make_group()
    assert group.query_admin() == INIT_ADMIN
    assert group.total_weight() == 17


def test_try_member_queries():
    group = make_group()
    assert group.member(USER1) == 11
    assert group.member(USER2) == 6
    assert group.member(USER3) is None
    assert len(group.list_members()) == 2


def test_add_new_remove_old_member():
    group = make_group()
    add = [Member(USER3, 15)]
    remove = [USER1]

    with pytest.raises(NotAdmin):
        group.update_members(USER1, HEIGHT + 5, add, remove)

    assert_users(group, 11, 6, None)
    assert_users(group, None, None, None, HEIGHT)
    assert_users(group, 11, 6, None, HEIGHT + 1)

    group.update_members(INIT_ADMIN, HEIGHT + 10, add, remove)

    assert_users(group, None, 6, 15)
    assert_users(group, 11, 6, None, HEIGHT + 1)


def test_add_old_remove_new_member():
    group = make_group()
    group.update_members(INIT_ADMIN, HEIGHT, [Member(USER1, 4)], [USER3])
    assert_users(group, 4, 6, None)


def test_add_and_remove_same_member():
    group = make_group()
    add = [Member(USER1, 20), Member(USER3, 5)]
    group.update_members(INIT_ADMIN, HEIGHT, add, [USER1])
    assert_users(group, None, 6, 5)


def test_update_members_returns_diffs_in_order():
    group = make_group()
    diff = group.update_members(
        INIT_ADMIN, HEIGHT, [Member(USER1, 20), Member(USER3, 5)], [USER2, "ghost"]
    )
    assert diff.diffs == [
        MemberDiff(USER1, 11, 20),
        MemberDiff(USER3, None, 5),
        MemberDiff(USER2, 6, None),
    ]


def test_add_remove_hooks():
    group = make_group()
    assert group.query_hooks() == []

    contract1 = "hook1"
    contract2 = "hook2"

    with pytest.raises(NotAdmin):
        group.add_hook(USER1, contract1)

    group.add_hook(INIT_ADMIN, contract1)
    assert group.query_hooks() == [contract1]

    with pytest.raises(HookNotRegistered):
        group.remove_hook(INIT_ADMIN, contract2)

    group.add_hook(INIT_ADMIN, contract2)
    assert group.query_hooks() == [contract1, contract2]

    with pytest.raises(HookAlreadyRegistered):
        group.add_hook(INIT_ADMIN, contract1)

    with pytest.raises(NotAdmin):
        group.remove_hook(USER1, contract1)

    group.remove_hook(INIT_ADMIN, contract1)
    assert group.query_hooks() == [contract2]


def test_hooks_fire():
    group = make_group()
    contract1 = "hook1"
    contract2 = "hook2"
    group.add_hook(INIT_ADMIN, contract1)
    group.add_hook(INIT_ADMIN, contract2)

    add = [Member(USER1, 20), Member(USER3, 5)]
    assert_users(group, 11, 6, None)
    res = group.execute_update_members(INIT_ADMIN, HEIGHT, add, [USER2])
    assert_users(group, 20, None, 5)

    assert len(res.messages) == 2
    hook_msg = MemberChangedHookMsg(
        [
            MemberDiff(USER1, 11, 20),
            MemberDiff(USER3, None, 5),
            MemberDiff(USER2, 6, None),
        ]
    )
    assert res.messages == [
        hook_msg.into_message(contract1),
        hook_msg.into_message(contract2),
    ]
    assert res.attributes == [
        ("action", "update_members"),
        ("added", "2"),
        ("removed", "1"),
        ("sender", INIT_ADMIN),
    ]


def test_execute_update_members_requires_admin():
    group = make_group()
    with pytest.raises(NotAdmin):
        group.execute_update_members(USER2, HEIGHT, [Member(USER3, 1)], [])
    assert_users(group, 11, 6, None)


def test_raw_values_after_instantiation():
    group = make_group()
    assert group.total_weight() == 17
    assert group.member(USER2) == 6
    assert group.member(USER3) is None


def test_update_admin_transfers_and_freezes():
    group = make_group()
    with pytest.raises(NotAdmin):
        group.update_admin(USER1, USER1)

    group.update_admin(INIT_ADMIN, USER1)
    assert group.query_admin() == USER1
    with pytest.raises(NotAdmin):
        group.update_members(INIT_ADMIN, HEIGHT, [Member(USER3, 1)], [])

    group.update_admin(USER1, None)
    assert group.query_admin() is None
    with pytest.raises(NotAdmin):
        group.update_members(USER1, HEIGHT, [Member(USER3, 1)], [])


def test_group_without_admin_is_immutable():
    group = GroupContract(members=[Member(USER1, 3)], height=1)
    with pytest.raises(NotAdmin):
        group.add_hook(USER1, "hook")
    assert group.total_weight() == 3


def test_list_members_pagination():
    members = [Member(f"addr{i:02d}", i) for i in range(40)]
    group = GroupContract(admin=INIT_ADMIN, members=members, height=1)

    first = group.list_members()
    assert [m.addr for m in first] == [f"addr{i:02d}" for i in range(10)]

    capped = group.list_members(limit=100)
    assert len(capped) == 30

    after = group.list_members(start_after="addr09", limit=3)
    assert after == [Member("addr10", 10), Member("addr11", 11), Member("addr12", 12)]


def test_list_members_sorted_by_address():
    group = make_group()
    assert group.list_members() == [Member(USER2, 6), Member(USER1, 11)]