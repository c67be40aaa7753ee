from ace_assist.announcements import Announcement, AnnouncementQueue, Category


def test_repeated_enqueue_only_queues_first():
    q = AnnouncementQueue()
    results = [q.enqueue("Examine", Category.MENU) for _ in range(5)]
    assert results == [True, False, False, False, False]
    assert len(q) == 1


def test_blank_text_is_never_queued():
    q = AnnouncementQueue()
    assert not q.enqueue("", Category.DIALOGUE)
    assert not q.enqueue("   \t", Category.DIALOGUE)
    assert len(q) == 0
    # Blank text does not overwrite the dedup slot either.
    assert q.last_text(Category.DIALOGUE) == ""


def test_reset_reenables_same_text():
    q = AnnouncementQueue()
    assert q.enqueue("Objection!", Category.DIALOGUE)
    assert q.dequeue() == Announcement("Objection!", Category.DIALOGUE)
    q.reset(Category.DIALOGUE)
    assert q.enqueue("Objection!", Category.DIALOGUE)
    assert len(q) == 1


def test_dedup_is_against_last_enqueued_not_delivered():
    q = AnnouncementQueue()
    q.enqueue("Hello", Category.DIALOGUE)
    q.dequeue()
    # Delivered already, but still the last enqueued text for the category.
    assert not q.enqueue("Hello", Category.DIALOGUE)


def test_dequeue_is_fifo_and_empty_returns_none():
    q = AnnouncementQueue()
    q.enqueue("one", Category.MENU)
    q.enqueue("two", Category.DIALOGUE)
    q.enqueue("three", Category.MENU_CHOICE)
    assert [q.dequeue().text for _ in range(3)] == ["one", "two", "three"]
    assert q.dequeue() is None


def test_structured_categories_dedup_independently():
    q = AnnouncementQueue()
    assert q.enqueue("Yes", Category.MENU)
    assert q.enqueue("Yes", Category.MENU_CHOICE)
    assert q.enqueue("Yes", Category.DIALOGUE)
    assert len(q) == 3


def test_free_text_categories_share_one_slot():
    q = AnnouncementQueue()
    assert q.enqueue("Puzzle complete!", Category.INVESTIGATION)
    assert not q.enqueue("Puzzle complete!", Category.SYSTEM_MESSAGE)
    q.reset(Category.SYSTEM_MESSAGE)
    assert q.enqueue("Puzzle complete!", Category.INVESTIGATION)


def test_reset_one_category_leaves_others():
    q = AnnouncementQueue()
    q.enqueue("Talk", Category.MENU)
    q.enqueue("Hi", Category.DIALOGUE)
    q.reset(Category.MENU)
    assert q.enqueue("Talk", Category.MENU)
    assert not q.enqueue("Hi", Category.DIALOGUE)


def test_reset_all():
    q = AnnouncementQueue()
    q.enqueue("Talk", Category.MENU)
    q.enqueue("Hi", Category.DIALOGUE)
    q.reset_all()
    assert q.enqueue("Talk", Category.MENU)
    assert q.enqueue("Hi", Category.DIALOGUE)


def test_bounded_backlog_drops_oldest():
    q = AnnouncementQueue(max_backlog=2)
    for text in ("a", "b", "c"):
        q.enqueue(text, Category.MENU)
    assert [a.text for a in q.pending()] == ["b", "c"]
    assert q.dropped == 1
