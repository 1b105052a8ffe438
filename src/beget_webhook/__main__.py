from beget_webhook.server import main

main()
