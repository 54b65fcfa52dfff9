#!/usr/bin/env python3
# -*- coding: utf_8 -*-

from tonfee.main import main


if __name__ == '__main__':
    main()
