import asyncio
import random

from autobot_engine import (
    Autobot, CronTrigger, Engine, EngineSettings, FrequencyTrigger, Scheduler, TaskLog, configure_logging, tasks_from_bots,
)

async def warm_cache(log: TaskLog) -> None:
    log("Cache warmed")

async def sweep_orders(log: TaskLog) -> None:
    await asyncio.sleep(random.uniform(0.5, 2))
    if random.random() < 0.3:
        raise RuntimeError("order store unavailable")
    log("Swept stale orders")

async def heartbeat(log: TaskLog) -> None:
    log("Still alive")

# Set up the bots
bots = [
    Autobot(bot_id="cache", engines=[Engine(trigger=FrequencyTrigger(value="once"), action=warm_cache)]),
    Autobot(bot_id="orders", engines=[Engine(trigger=FrequencyTrigger(value=5), action=sweep_orders)]),
    Autobot(bot_id="heartbeat", engines=[Engine(trigger=CronTrigger(expression="* * * * *"), action=heartbeat)]),
]

async def main():
    settings = EngineSettings(log_level="debug")
    configure_logging(settings)
    scheduler = Scheduler(settings)
    await scheduler.start(tasks_from_bots(bots))
    try:
        await scheduler.wait()
    finally:
        await scheduler.stop()

if __name__ == "__main__":
    asyncio.run(main())
