import asyncio

import aiohttp

from autobot_engine import FrequencyTrigger, Scheduler, Task, TaskLog, configure_logging, get_settings, retry_fetch

RATES_URL = "https://api.coinbase.com/v2/exchange-rates?currency=BTC"

async def fetch_rates(log: TaskLog) -> None:
    async with aiohttp.ClientSession() as session:
        async with await retry_fetch(session, RATES_URL, max_attempts=3) as response:
            if response.status != 200:
                log.warning("Rates request returned", response.status)
                return
            body = await response.json()
            log("BTC/USD", body["data"]["rates"]["USD"])

async def main():
    configure_logging(get_settings())
    scheduler = Scheduler()
    await scheduler.start([
        Task(task_id="btc-rates", description="Poll BTC exchange rates", trigger=FrequencyTrigger(value="minute"), action=fetch_rates),
    ])
    await scheduler.wait()

if __name__ == "__main__":
    asyncio.run(main())
