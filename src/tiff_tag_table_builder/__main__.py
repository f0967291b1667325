import sys

from tiff_tag_table_builder.builder import main

sys.exit(main())
