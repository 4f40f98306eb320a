import json
import tempfile
import unittest
from pathlib import Path

from castaway.adventure.engine import describe
from castaway.adventure.loader import load_world, validate_world
from castaway.adventure.models import EffectAction
from castaway.core.config import DEFAULT_WORLD
from castaway.core.errors import LoadError


BASE_WORLD = json.loads(DEFAULT_WORLD.read_text(encoding="utf-8"))


def _copy():
    return json.loads(json.dumps(BASE_WORLD))


class LoaderTests(unittest.TestCase):
    def test_loads_bundled_island(self):
        world = load_world(DEFAULT_WORLD)
        self.assertEqual(world.starting_room, 1)
        self.assertEqual(sorted(world.rooms), [1, 2, 3, 4, 5, 6])

        gate = world.rooms[5].paths["north"]
        self.assertEqual(gate.room_id, 6)
        self.assertTrue(gate.is_locked)

        key = world.rooms[4].items[0]
        self.assertEqual(key.name, "rusty key")
        self.assertEqual(key.effect_in(5).kind, EffectAction.UNLOCK_DOOR)
        self.assertIsNone(key.effect_in(4))

    def test_starting_room_is_describable(self):
        world = load_world(_copy())
        view = describe(world, world.starting_room)
        self.assertIsNotNone(view)
        self.assertIn("sunny beach", view.description)

    def test_accepts_json_string_and_yaml_file(self):
        world = load_world(json.dumps(BASE_WORLD))
        self.assertEqual(len(world.rooms), 6)

        yaml_doc = (
            "startingRoom: start\n"
            "rooms:\n"
            "  - id: start\n"
            "    description: A bare room.\n"
            "    paths:\n"
            "      up: {roomID: attic}\n"
            "  - id: attic\n"
            "    description: Dusty.\n"
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "world.yaml"
            path.write_text(yaml_doc, encoding="utf-8")
            world = load_world(path)

        self.assertEqual(world.starting_room, "start")
        self.assertFalse(world.rooms["start"].paths["up"].is_locked)
        self.assertEqual(world.rooms["attic"].items, [])

    def test_malformed_sources(self):
        with self.assertRaises(LoadError):
            load_world('{"startingRoom": 1, "rooms": [')

        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope.json"
            with self.assertRaises(LoadError):
                load_world(missing)

            broken = Path(tmp) / "broken.json"
            broken.write_text("not json", encoding="utf-8")
            with self.assertRaises(LoadError):
                load_world(broken)

            latin = Path(tmp) / "latin.json"
            latin.write_bytes(b'{"startingRoom": 1, "rooms": [{"id": 1, "description": "caf\xe9 \xff\xfe"}]}')
            with self.assertRaises(LoadError):
                load_world(latin)

    def test_validation_errors(self):
        # top level not a mapping
        with self.assertRaises(LoadError):
            validate_world([1, 2, 3])

        # start room missing
        bad = _copy()
        bad["startingRoom"] = 42
        with self.assertRaises(LoadError):
            validate_world(bad)

        # dangling path
        bad = _copy()
        bad["rooms"][0]["paths"]["north"]["roomID"] = 99
        with self.assertRaises(LoadError):
            validate_world(bad)

        # unhashable path target
        bad = _copy()
        bad["rooms"][0]["paths"]["north"]["roomID"] = [2]
        with self.assertRaises(LoadError):
            validate_world(bad)

        # room without description
        bad = _copy()
        del bad["rooms"][2]["description"]
        with self.assertRaises(LoadError):
            validate_world(bad)

        # room without id
        bad = _copy()
        del bad["rooms"][2]["id"]
        with self.assertRaises(LoadError):
            validate_world(bad)

        # duplicate room ids
        bad = _copy()
        bad["rooms"][1]["id"] = 1
        with self.assertRaises(LoadError):
            validate_world(bad)

        # isLocked not a boolean
        bad = _copy()
        bad["rooms"][4]["paths"]["north"]["isLocked"] = "yes"
        with self.assertRaises(LoadError):
            validate_world(bad)

        # item without a name
        bad = _copy()
        del bad["rooms"][3]["items"][0]["name"]
        with self.assertRaises(LoadError):
            validate_world(bad)

        # use effect without message
        bad = _copy()
        del bad["rooms"][3]["items"][0]["useEffects"]["5"]["message"]
        with self.assertRaises(LoadError):
            validate_world(bad)

    def test_unknown_effect_room_only_warns(self):
        data = _copy()
        data["rooms"][3]["items"][0]["useEffects"]["77"] = {"action": "unlockDoor", "message": "Nothing."}
        with self.assertLogs("castaway.adventure.loader", level="WARNING"):
            world = load_world(data)
        self.assertIn("77", world.rooms[4].items[0].use_effects)


if __name__ == "__main__":
    unittest.main()
