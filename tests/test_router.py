from ace_assist.announcements import Category
from ace_assist.game_state import ChoiceState, MenuState

from conftest import delivered

DETECTIVE = ["Examine", "Move", "Talk", "Present"]


def test_speaker_named_only_when_changed(pipeline):
    router = pipeline.router
    router.dialogue("Hello", "Phoenix")
    router.dialogue("Again", "Phoenix")
    router.dialogue("Hi", "Maya")
    router.dialogue("No name", "")
    assert delivered(pipeline) == ["Phoenix: Hello", "Again", "Maya: Hi", "No name"]


def test_dialogue_close_forgets_speaker(pipeline):
    router = pipeline.router
    router.dialogue("Hello", "Phoenix")
    router.dialogue_closed()
    router.dialogue("Hello", "Phoenix")
    assert delivered(pipeline) == ["Phoenix: Hello", "Phoenix: Hello"]


def test_positional_menus(pipeline):
    router = pipeline.router
    router.menu_opened(MenuState("detective", DETECTIVE, cursor=2))
    router.menu_opened(MenuState("move", ["Lobby", ""], cursor=1))
    assert delivered(pipeline) == ["Menu: Talk (3 of 4)", "Move: Location 2 (2 of 2)"]


def test_menu_cursor_is_bare_item(pipeline):
    pipeline.router.menu_cursor(MenuState("detective", DETECTIVE, cursor=3))
    assert delivered(pipeline) == ["Present"]


def test_slot_menus(pipeline):
    router = pipeline.router
    menu = MenuState("load", ["Episode 1 - 10:42", ""], cursor=0)
    router.menu_opened(menu)
    router.menu_cursor(menu)
    menu.cursor = 1
    router.menu_cursor(menu)
    menu.cursor = -1
    assert router.menu_cursor(menu) is False
    assert delivered(pipeline) == ["Load menu opened", "Slot 1: Episode 1 - 10:42",
                                   "Slot 2"]


def test_options_menu(pipeline):
    pipeline.router.menu_opened(MenuState("options", ["Text speed", "Volume"]))
    assert delivered(pipeline) == ["Options: Text speed"]


def test_choice_plate(pipeline):
    router = pipeline.router
    talk = ChoiceState("talk", ["Gramarye", "Magic", "", "stale"])
    router.choice_shown(talk)
    talk.cursor = 1
    router.choice_cursor(talk)
    assert delivered(pipeline) == ["Talk menu: 2 options. Gramarye", "Magic"]


def test_empty_choice_plate_is_silent(pipeline):
    assert pipeline.router.choice_shown(ChoiceState(options=["", ""])) is False
    assert delivered(pipeline) == []


def test_menu_close_allows_repeat(pipeline):
    router = pipeline.router
    menu = MenuState("detective", DETECTIVE)
    router.menu_opened(menu)
    router.menu_opened(menu)
    router.menu_closed()
    router.menu_opened(menu)
    assert delivered(pipeline) == ["Menu: Examine (1 of 4)"] * 2


def test_contexts_map_to_categories(pipeline):
    router = pipeline.router
    router.investigation("Point of interest")
    router.system("Goodbye.")
    router.choice_shown(ChoiceState(options=["Yes"]))
    assert [a.category for a in pipeline.queue.pending()] == [
        Category.INVESTIGATION, Category.SYSTEM_MESSAGE, Category.MENU_CHOICE]
