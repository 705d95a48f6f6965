from slackmoji.emoji_dumper import main

main()
