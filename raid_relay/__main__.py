from raid_relay.main import run

run()
