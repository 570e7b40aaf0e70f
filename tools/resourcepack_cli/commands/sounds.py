"""Sound commands.

This module provides:
- sound add: Store an .ogg file and register it under an event
- sound remove: Remove an event from sounds.json
- sound list: List events, or show one as JSON
"""

from __future__ import annotations

import argparse

from resourcepack_cli.commands.common import CommandContext, print_json
from resourcepack_cli.editing.sounds import SoundRequest, add_sound, get_sound_event, list_sounds, remove_sound
from resourcepack_cli.errors import NotFoundError


def cmd_sound_add(ctx: CommandContext, args: argparse.Namespace) -> int:
    package = ctx.load()
    request = SoundRequest(
        sound_id=args.sound_id,
        data=args.file.read_bytes(),
        namespace=args.sound_namespace,
        sound_path=args.path,
        subtitle=args.subtitle,
        replace=args.replace,
    )
    ctx.save(add_sound(package, request))
    print(f"Added sound '{args.sound_id}' in namespace '{args.sound_namespace}'")
    return 0


def cmd_sound_remove(ctx: CommandContext, args: argparse.Namespace) -> int:
    ctx.save(remove_sound(ctx.load(), args.sound_id, args.sound_namespace))
    print(f"Removed sound '{args.sound_id}'")
    return 0


def cmd_sound_list(ctx: CommandContext, args: argparse.Namespace) -> int:
    """List sound events; with an event id, print its definition as JSON."""
    package = ctx.load()
    if args.sound_id:
        event = get_sound_event(package, args.sound_id, args.sound_namespace)
        if event is None:
            raise NotFoundError("Sound", f"{args.sound_namespace}:{args.sound_id}")
        print_json(event)
        return 0

    sounds = list_sounds(package, args.sound_namespace)
    if not sounds:
        print("No sounds found. Use 'sound add' to add sounds.")
        return 0
    for sound_id in sounds:
        print(sound_id)
    return 0
